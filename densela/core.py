# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Dense matrix construction, size queries and structural predicates.
"""

from typing import Callable, Optional, Tuple

import numpy as np

from .exceptions import DimensionMismatchError, InvalidValueError, MatrixError
from .utils import EQUALS_TOL, ZERO_TOL
from .validation import as_matrix, assert_index


def _positive_int(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidValueError(f"{name} must be a positive integer, got {value!r}")
    if value < 1:
        raise InvalidValueError(f"{name} must be a positive integer, got {value}")
    return int(value)


def create(rows: int = 1, cols: Optional[int] = None) -> np.ndarray:
    """Zero matrix of shape (rows, cols); square when ``cols`` is omitted."""
    rows = _positive_int(rows, "rows")
    cols = rows if cols is None else _positive_int(cols, "cols")
    return np.zeros((rows, cols), dtype=np.float64)


def identity(n: int) -> np.ndarray:
    n = _positive_int(n, "size")
    return np.eye(n, dtype=np.float64)


def size(A) -> Tuple[int, int]:
    """Return (rows, columns)."""
    M = as_matrix(A)
    return M.shape[0], M.shape[1]


def size_square(A) -> int:
    """Return n for an n×n matrix; raises NotSquareError otherwise."""
    return as_matrix(A, square=True).shape[0]


def is_valid(A) -> bool:
    try:
        as_matrix(A)
    except MatrixError:
        return False
    return True


def is_square(A) -> bool:
    M = as_matrix(A)
    return M.shape[0] == M.shape[1]


def is_zero(A, threshold: float = ZERO_TOL) -> bool:
    M = as_matrix(A)
    return bool(np.all(np.abs(M) <= threshold))


def is_identity(A, threshold: float = ZERO_TOL) -> bool:
    M = as_matrix(A)
    if M.shape[0] != M.shape[1]:
        return False
    return bool(np.all(np.abs(M - np.eye(M.shape[0])) <= threshold))


def is_symmetric(A, threshold: float = ZERO_TOL) -> bool:
    M = as_matrix(A)
    if M.shape[0] != M.shape[1]:
        return False
    return bool(np.all(np.abs(M - M.T) <= threshold))


def is_diagonal(A, threshold: float = ZERO_TOL) -> bool:
    """Every off-diagonal element is within ``threshold`` of zero."""
    M = as_matrix(A)
    if M.shape[0] != M.shape[1]:
        return False
    off = M - np.diag(np.diag(M))
    return bool(np.all(np.abs(off) <= threshold))


def clone(A) -> np.ndarray:
    return as_matrix(A)


def equals(a, b, tolerance: float = EQUALS_TOL) -> bool:
    """
    True when a and b have the same shape and every pair of elements differs
    by at most ``tolerance``.
    """
    a = as_matrix(a, "a")
    b = as_matrix(b, "b")
    if not np.isfinite(tolerance) or tolerance < 0:
        raise InvalidValueError("Tolerance must be a non-negative number")
    if a.shape != b.shape:
        return False
    return bool(np.all(np.abs(a - b) <= tolerance))


def to_string(A, precision: int = 2) -> str:
    """
    >>> print(to_string([[1, 2], [3, 4]], 0))
    [ 1, 2 ]
    [ 3, 4 ]
    """
    M = as_matrix(A)
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
        raise InvalidValueError("Precision must be a non-negative integer")
    return "\n".join(
        "[ " + ", ".join(f"{val:.{precision}f}" for val in row) + " ]" for row in M
    )


def trace(A) -> float:
    """Sum of the main diagonal; rectangular input uses min(rows, cols) entries."""
    return float(np.trace(as_matrix(A)))


def transpose(A) -> np.ndarray:
    # as_matrix already hands back a private copy, the copy() detaches the view
    return as_matrix(A).T.copy()


def map_elements(A, fn: Callable[[float, int, int], float]) -> np.ndarray:
    """Apply ``fn(value, row, col)`` to every element, returning a new matrix."""
    M = as_matrix(A)
    rows, cols = M.shape
    out = np.empty_like(M)
    for i in range(rows):
        for j in range(cols):
            out[i, j] = fn(float(M[i, j]), i, j)
    return as_matrix(out, "mapped matrix")


# ---------------------------------------------------------------------
# Block helpers (Strassen partition / reconstruction)
# ---------------------------------------------------------------------


def submatrix(A, row: int, col: int, height: int, width: int) -> np.ndarray:
    """Copy of the height×width block whose top-left corner is (row, col)."""
    M = as_matrix(A)
    rows, cols = M.shape
    row = assert_index(row, rows, "row")
    col = assert_index(col, cols, "col")
    height = _positive_int(height, "height")
    width = _positive_int(width, "width")
    if row + height > rows or col + width > cols:
        raise DimensionMismatchError(
            f"Block {height}×{width} at ({row}, {col}) does not fit in a {rows}×{cols} matrix",
            shape_a=(rows, cols),
            shape_b=(height, width),
        )
    return M[row : row + height, col : col + width].copy()


def pad(A, rows: int, cols: int) -> np.ndarray:
    """Zero-fill (or truncate) A to shape (rows, cols), keeping the top-left corner."""
    M = as_matrix(A)
    rows = _positive_int(rows, "rows")
    cols = _positive_int(cols, "cols")
    out = np.zeros((rows, cols), dtype=np.float64)
    r = min(rows, M.shape[0])
    c = min(cols, M.shape[1])
    out[:r, :c] = M[:r, :c]
    return out


def combine(c11, c12, c21, c22) -> np.ndarray:
    """Assemble four equally sized square quadrants into one matrix."""
    blocks = [as_matrix(c, name) for c, name in ((c11, "c11"), (c12, "c12"), (c21, "c21"), (c22, "c22"))]
    shape = blocks[0].shape
    if shape[0] != shape[1] or any(b.shape != shape for b in blocks):
        raise DimensionMismatchError(
            "Quadrants must be square and of identical size, got "
            + ", ".join(f"{b.shape[0]}×{b.shape[1]}" for b in blocks)
        )
    return np.block([[blocks[0], blocks[1]], [blocks[2], blocks[3]]])
