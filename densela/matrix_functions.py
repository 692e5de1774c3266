# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np

from .exceptions import DimensionMismatchError, SingularMatrixError
from .validation import as_matrix, assert_index

logger = logging.getLogger(__name__)

# cofactor expansion beyond this size is slow enough to deserve a warning
_COFACTOR_WARN_SIZE = 8


def det(A) -> float:
    """
    Calculate the determinant of n-by-n matrix A.

    1×1 and 2×2 are closed form, 3×3 uses the rule of Sarrus and anything
    larger is expanded along the first row (O(n!)).
    """
    A = as_matrix(A, square=True)
    n = A.shape[0]
    if n > _COFACTOR_WARN_SIZE:
        logger.warning("det(): cofactor expansion on a %dx%d matrix is O(n!)", n, n)
    return _det(A)


def _det(A: np.ndarray) -> float:
    n = A.shape[0]
    if n == 1:
        return float(A[0, 0])
    if n == 2:
        return float(A[0, 0] * A[1, 1] - A[0, 1] * A[1, 0])
    if n == 3:
        return float(
            A[0, 0] * (A[1, 1] * A[2, 2] - A[1, 2] * A[2, 1])
            - A[0, 1] * (A[1, 0] * A[2, 2] - A[1, 2] * A[2, 0])
            + A[0, 2] * (A[1, 0] * A[2, 1] - A[1, 1] * A[2, 0])
        )

    total = 0.0
    for col in range(n):
        element = A[0, col]
        if element == 0.0:
            continue
        sign = -1.0 if col & 1 else 1.0
        total += element * sign * _det(_drop(A, 0, col))
    return total


def _drop(A: np.ndarray, row: int, col: int) -> np.ndarray:
    """A with one row and one column removed."""
    n, m = A.shape
    return A[np.arange(n) != row][:, np.arange(m) != col]


def minor(A, row: int, col: int) -> float:
    """
    Determinant of A with ``row`` and ``col`` removed.

    Raises
    ------
    DimensionMismatchError : A is 1×1, where no minor exists
    """
    A = as_matrix(A, square=True)
    n = A.shape[0]
    if n < 2:
        raise DimensionMismatchError(
            "Matrix must be at least 2x2 to compute a minor", shape_a=A.shape
        )
    row = assert_index(row, n, "row")
    col = assert_index(col, n, "col")
    return _det(_drop(A, row, col))


def cofactor(A, row: int, col: int) -> float:
    """(-1)^(row+col) · minor(A, row, col)"""
    # indices are checked by minor before the parity test
    value = minor(A, row, col)
    return -value if (row + col) & 1 else value


def cofactor_matrix(A) -> np.ndarray:
    A = as_matrix(A, square=True)
    return _cofactor_matrix(A)


def _cofactor_matrix(A: np.ndarray) -> np.ndarray:
    n = A.shape[0]
    if n == 1:
        # the empty minor has determinant 1
        return np.ones((1, 1))
    C = np.empty_like(A)
    for i in range(n):
        for j in range(n):
            sign = -1.0 if (i + j) & 1 else 1.0
            C[i, j] = sign * _det(_drop(A, i, j))
    # no signed zeros in the output
    return C + 0.0


def adj(A) -> np.ndarray:
    """
    Adjugate (classical adjoint) of a square matrix A: the transpose of the
    cofactor matrix.
    """
    A = as_matrix(A, square=True)
    n = A.shape[0]
    if n > _COFACTOR_WARN_SIZE:
        logger.warning("adj(): %d cofactors of a %dx%d matrix, O(n!) each", n * n, n, n)
    return _cofactor_matrix(A).T.copy()


def inverse(A, tol: float = 0.0) -> np.ndarray:
    """
    A^{-1} = adj(A) / det(A).

    Only an exactly zero determinant is rejected by default, so
    ill-conditioned but invertible matrices (Hilbert) still invert. A
    positive ``tol`` also rejects determinants at or below ``tol`` times the
    Hadamard bound Π‖row_i‖₂, the largest determinant a matrix with these
    row lengths could have.

    Raises
    ------
    SingularMatrixError
    """
    A = as_matrix(A, square=True)
    d = _det(A)
    bound = float(np.prod(np.linalg.norm(A, axis=1)))
    if d == 0.0 or abs(d) <= tol * bound:
        raise SingularMatrixError(
            f"Matrix is not invertible (determinant {d:.3e} is zero "
            f"relative to Hadamard bound {bound:.3e})",
            value=d,
        )
    inv = _cofactor_matrix(A).T / d
    return inv + 0.0
