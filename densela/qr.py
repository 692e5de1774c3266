# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import NamedTuple, Union

import numpy as np

from .elimination import back_substitute
from .exceptions import DimensionMismatchError, LinearlyDependentColumnsError
from .projections import complement_vector
from .utils import EPS
from .validation import as_matrix

logger = logging.getLogger(__name__)


class QRResult(NamedTuple):
    Q: np.ndarray
    R: np.ndarray


def _mgs(
    A: np.ndarray, tol: float, allow_dependent: bool
) -> Union[QRResult, LinearlyDependentColumnsError]:
    """
    Modified Gram-Schmidt on the columns of a validated (m, n) array, m >= n.

    A dependent column is not raised here: the error is handed back as a
    value so callers that can recover (eigen) branch on it without a
    try/except.
    """
    m, n = A.shape
    Q = np.zeros((m, n))
    R = np.zeros((n, n))

    for j in range(n):
        v = A[:, j].copy()
        for k in range(j):
            R[k, j] = Q[:, k] @ v
            v -= R[k, j] * Q[:, k]
        norm = np.linalg.norm(v)

        if norm < tol:
            if not allow_dependent:
                return LinearlyDependentColumnsError(
                    f"Column {j} is linearly dependent on previous columns "
                    f"(residual norm {norm:.3e})",
                    column=j,
                    norm=float(norm),
                )
            # R[j, :j+1] stays zero; entries right of the diagonal are still
            # the projections of later columns onto the substitute
            q = complement_vector(Q[:, :j])
            if q is None:
                q = np.zeros(m)
            logger.debug("qr(): column %d dependent (norm %.3e), substituted", j, norm)
            Q[:, j] = q
            continue

        R[j, j] = norm
        Q[:, j] = v / norm

    return QRResult(Q, R)


def qr(
    A,
    allow_dependent: bool = False,
    reorth: bool = False,
    tol: float = EPS,
) -> QRResult:
    """
    Modified Gram-Schmidt orthogonalization (QR decomposition)

    Parameters
    ----------
    A : (m, n) array-like, m >= n
    allow_dependent : bool
        Instead of raising on a (numerically) dependent column j, put a unit
        vector orthogonal to the previous columns of Q in its place and
        leave R rank-deficient: R[j, :j+1] is zero, while R[j, j+1:] keeps
        the projections of later columns onto the substitute so that
        Q @ R still reproduces A.
    reorth : bool
        Run a second Gram-Schmidt pass over Q to recover orthogonality,
        folding its triangular factor into R.
    tol : float
        Residual column norm below which a column counts as dependent.

    Returns
    -------
    QRResult(Q, R)
        Q : (m, n) ndarray, orthonormal columns
        R : (n, n) ndarray, upper-triangular, Q @ R ≈ A

    Raises
    ------
    DimensionMismatchError : m < n
    LinearlyDependentColumnsError : unless ``allow_dependent``
    """
    A = as_matrix(A)
    m, n = A.shape
    if m < n:
        raise DimensionMismatchError(
            f"QR decomposition requires at least as many rows as columns, got {m}×{n}",
            shape_a=(m, n),
        )

    result = _mgs(A, tol, allow_dependent)
    if isinstance(result, LinearlyDependentColumnsError):
        raise result

    Q, R = result
    if reorth:
        # Q already has unit columns, so the second pass cannot fail
        second = _mgs(Q, tol, True)
        Q, R = second.Q, second.R @ R

    return QRResult(Q, R)


def least_squares_qr(A, b) -> np.ndarray:
    """
    Solve min ‖Ax – b‖₂ using a thin QR factorisation (A = QR).

    Returns:
    x : (n, ) ndarray
        The least squares solution to Ax = b
    """
    Q, R = qr(A)
    b = np.asarray(b, dtype=float)
    if b.shape[0] != Q.shape[0]:
        raise DimensionMismatchError(
            f"b has {b.shape[0]} entries but A has {Q.shape[0]} rows",
            shape_a=(Q.shape[0], R.shape[0]),
            shape_b=b.shape,
        )
    return back_substitute(R, Q.T @ b)
