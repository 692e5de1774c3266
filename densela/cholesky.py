# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np

from .exceptions import NotPositiveDefiniteError
from .utils import EPS, scale_tol
from .validation import as_matrix


def cholesky(A, tol: float = EPS) -> np.ndarray:
    """
    Cholesky-Banachiewicz factorisation A = L Lᵀ, computed row by row.

    Parameters
    ----------
    A : (n, n) array-like, symmetric positive definite
    tol : float
        Symmetry is checked against tol·max(1, ‖A‖∞); a diagonal entry of L
        below ``tol`` is rejected before anything is divided by it.

    Returns
    -------
    L : (n, n) ndarray, lower-triangular with a positive diagonal

    Raises
    ------
    NotSquareError
    NotPositiveDefiniteError : A is not symmetric, or a reduced diagonal
        A[i, i] - Σ L[i, k]² is not positive.
    """
    A = as_matrix(A, square=True)
    n = A.shape[0]

    asym = np.abs(A - A.T)
    if np.any(asym > scale_tol(A, tol)):
        i, j = (int(k) for k in np.unravel_index(asym.argmax(), asym.shape))
        raise NotPositiveDefiniteError(
            f"Matrix is not symmetric: A[{i}][{j}] = {A[i, j]} but A[{j}][{i}] = {A[j, i]}",
            row=i,
            column=j,
            value=float(A[i, j]),
        )

    L = np.zeros((n, n))
    for i in range(n):
        for j in range(i):
            if L[j, j] < tol:
                raise NotPositiveDefiniteError(
                    f"Diagonal L[{j}][{j}] = {L[j, j]:.3e} is too small to divide by",
                    row=j,
                    column=j,
                    value=float(L[j, j]),
                )
            L[i, j] = (A[i, j] - L[i, :j] @ L[j, :j]) / L[j, j]

        diagonal = A[i, i] - L[i, :i] @ L[i, :i]
        if diagonal <= 0.0:
            raise NotPositiveDefiniteError(
                f"Matrix is not positive definite at element [{i}][{i}] "
                f"(reduced diagonal {diagonal:.3e})",
                row=i,
                column=i,
                value=float(diagonal),
            )
        L[i, i] = np.sqrt(diagonal)

    return L
