# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import NamedTuple

import numpy as np

from .arithmetic import matrix_multiply
from .eigen import eigen
from .projections import gram_schmidt
from .utils import EIGEN_MAX_ITER, EPS
from .validation import as_matrix


class SVDResult(NamedTuple):
    U: np.ndarray
    S: np.ndarray
    Vt: np.ndarray


def svd(A, tol: float = EPS, max_iter: int = EIGEN_MAX_ITER) -> SVDResult:
    """
    Economy-size Singular Value Decomposition built on the eigenproblem of
    AᵀA.

    For an m-by-n real matrix with k = min(m, n) this returns
        U : m-by-k matrix whose columns are orthonormal
        S : length-k vector of singular values, sorted in descending order
        Vt: k-by-n matrix whose rows are orthonormal  (V.T)

    Algorithm outline
    -----------------
    1.  Form AᵀA, a symmetric n-by-n matrix.
    2.  Eigendecompose it with ``eigen``. Eigenvectors v become the right
        singular vectors; eigenvalues λ (clamped at 0) give σ = √λ.
    3.  u_j = A v_j / σ_j for every σ_j > tol, a zero column otherwise.
    4.  Gram-Schmidt over U, filling zero columns with an orthonormal
        complement, to undo the drift of steps 2 and 3.

    Parameters
    ----------
    A : (m, n) array-like
    tol : float
        Singular values at or below this get no left vector of their own.
    max_iter : int
        Passed to the QR iteration inside ``eigen``. The iteration is
        unshifted, so closely spaced singular values converge slowly: with
        the default cap the reconstruction error can stay around 1e-4 (only a
        debug record from ``densela.eigen`` reports the cap was hit). Raise
        ``max_iter`` when that matters.
    """
    A = as_matrix(A)
    m, n = A.shape

    # Wide matrices: decompose the transpose and swap the roles of the
    # left and right singular vectors.
    if m < n:
        U, S, Vt = svd(A.T, tol, max_iter)
        return SVDResult(Vt.T.copy(), S, U.T.copy())

    if n == 1:
        return _svd_column(A)

    # Step-1: the normal-equations matrix
    ATA = matrix_multiply(A.T, A)
    ATA = (ATA + ATA.T) / 2.0

    # Step-2: eigen-decomposition, largest singular value first
    eigenvalues, V = eigen(ATA, max_iter=max_iter)
    S = np.sqrt(np.clip(eigenvalues, 0.0, None))
    order = np.argsort(-S, kind="stable")
    S = S[order]
    V = V[:, order]

    # Step-3: left singular vectors
    AV = matrix_multiply(A, V)
    U = np.zeros((m, n))
    nonzero = S > tol
    U[:, nonzero] = AV[:, nonzero] / S[nonzero]

    # Step-4: re-orthonormalise
    U = gram_schmidt(U, complete=True)

    return SVDResult(U, S, V.T.copy())


def _svd_column(A: np.ndarray) -> SVDResult:
    """m×1 case (1×1 included): σ is the column norm."""
    m = A.shape[0]
    norm = float(np.linalg.norm(A[:, 0]))
    if m == 1:
        value = A[0, 0]
        return SVDResult(np.ones((1, 1)), np.array([abs(value)]), np.array([[1.0 if value >= 0 else -1.0]]))
    if norm == 0.0:
        U = np.zeros((m, 1))
        U[0, 0] = 1.0
    else:
        U = A / norm
    return SVDResult(U, np.array([norm]), np.ones((1, 1)))
