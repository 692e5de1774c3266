# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import NamedTuple

import numpy as np

from .arithmetic import matrix_multiply
from .core import _positive_int
from .exceptions import ComplexEigenvaluesError, LinearlyDependentColumnsError
from .qr import _mgs
from .utils import EIGEN_MAX_ITER, EIGEN_TOL, EPS
from .validation import as_matrix

logger = logging.getLogger(__name__)


class EigenResult(NamedTuple):
    eigenvalues: np.ndarray
    eigenvectors: np.ndarray


def eigen(
    A,
    tol: float = EIGEN_TOL,
    max_iter: int = EIGEN_MAX_ITER,
    pivot_tol: float = EPS,
) -> EigenResult:
    """
    Real eigenvalues and eigenvectors of a square matrix A.

    1×1 and 2×2 matrices are solved in closed form from the characteristic
    polynomial; anything larger goes through ``eigen_qr_iteration``.

    Parameters
    ----------
    A : (n, n) array-like
    tol : float
        QR iteration stops once every strictly-lower entry is below this.
    max_iter : int
        Cap on QR iterations.
    pivot_tol : float
        Off-diagonal entries at or below this count as zero when choosing
        2×2 eigenvectors; also the QR dependent-column threshold.

    Returns
    -------
    EigenResult(eigenvalues, eigenvectors)
        eigenvalues  : (n,) ndarray
        eigenvectors : (n, n) ndarray, unit column j pairs with eigenvalue j

    Raises
    ------
    NotSquareError
    ComplexEigenvaluesError : 2×2 with a negative discriminant
    """
    A = as_matrix(A, square=True)
    n = A.shape[0]

    if n == 1:
        return EigenResult(np.array([A[0, 0]]), np.ones((1, 1)))
    if n == 2:
        return _eigen_2x2(A, pivot_tol)
    return eigen_qr_iteration(A, max_iter=max_iter, tol=tol, pivot_tol=pivot_tol)


def _eigen_2x2(A: np.ndarray, pivot_tol: float) -> EigenResult:
    (a, b), (c, d) = A

    # trace² - 4·det rearranged; no cancellation when a ≈ d
    disc = (a - d) ** 2 + 4.0 * b * c
    if disc < 0.0:
        scale = max(1.0, float(np.abs(A).max()))
        if disc < -pivot_tol * scale * scale:
            raise ComplexEigenvaluesError(
                f"Complex eigenvalues are not supported (discriminant {disc:.3e})",
                discriminant=float(disc),
            )
        disc = 0.0

    root = np.sqrt(disc)
    lambdas = np.array([(a + d + root) / 2.0, (a + d - root) / 2.0])

    V = np.empty((2, 2))
    for j, lam in enumerate(lambdas):
        # any non-zero row of (A - λI) gives the null vector directly
        if abs(b) > pivot_tol:
            v = np.array([b, lam - a])
        elif abs(c) > pivot_tol:
            v = np.array([lam - d, c])
        else:
            # diagonal: λ₁ belongs to the larger of a, d
            first = 0 if a >= d else 1
            v = np.zeros(2)
            v[first if j == 0 else 1 - first] = 1.0
        V[:, j] = v / np.linalg.norm(v)

    return EigenResult(lambdas, V)


def eigen_qr_iteration(
    A,
    max_iter: int = EIGEN_MAX_ITER,
    tol: float = EIGEN_TOL,
    pivot_tol: float = EPS,
) -> EigenResult:
    """
    Unshifted QR algorithm: A_{k+1} = R_k Q_k.

    The diagonal of the final iterate holds the eigenvalue estimates and the
    accumulated product of the Q_k their vectors (exact eigenvectors for
    symmetric input, Schur vectors otherwise). A rank-deficient iterate is
    factored with QR's dependent-column substitution instead of failing.
    """
    A = as_matrix(A, square=True)
    max_iter = _positive_int(max_iter, "max_iter")
    n = A.shape[0]

    Ak = A
    Q_total = np.eye(n)
    converged = False
    iteration = 0

    for iteration in range(1, max_iter + 1):
        step = _mgs(Ak, pivot_tol, allow_dependent=False)
        if isinstance(step, LinearlyDependentColumnsError):
            logger.debug("eigen_qr_iteration(): %s; retrying with substitution", step)
            step = _mgs(Ak, pivot_tol, allow_dependent=True)
        Q, R = step

        Ak = matrix_multiply(R, Q)
        Q_total = matrix_multiply(Q_total, Q)

        if np.all(np.abs(np.tril(Ak, -1)) < tol):
            converged = True
            break

    if converged:
        logger.debug("eigen_qr_iteration(): converged after %d iterations", iteration)
    else:
        logger.debug(
            "eigen_qr_iteration(): stopped at the %d iteration cap, max sub-diagonal %.3e",
            max_iter,
            float(np.abs(np.tril(Ak, -1)).max()),
        )

    return EigenResult(np.diag(Ak).copy(), Q_total)
