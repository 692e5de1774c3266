# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Input contracts shared by every public operation.

Each validator checks one thing and fails fast with a typed error whose
message names the argument and, where it can, the offending row/column.
Validated operands come back as fresh float64 arrays, so nothing returned by
the engine ever aliases caller memory.
"""

import math
import numbers

import numpy as np

from .exceptions import (
    DimensionMismatchError,
    InvalidValueError,
    NotSquareError,
)

# bool is deliberately absent: True/False are not matrix entries
_NUMERIC_KINDS = "iuf"


def _as_numeric_array(value, name: str) -> np.ndarray:
    if value is None:
        raise InvalidValueError(f"{name} must not be None")
    try:
        arr = np.asarray(value)
    except (TypeError, ValueError) as e:
        # numpy refuses ragged nesting outright
        raise InvalidValueError(f"{name}: cannot convert to an array: {e}") from e
    if arr.dtype.kind not in _NUMERIC_KINDS:
        raise InvalidValueError(
            f"{name}: non-numeric dtype {arr.dtype}, expected real numbers"
        )
    return arr


def as_matrix(A, name: str = "matrix", square: bool = False) -> np.ndarray:
    """
    Validate ``A`` and return it as a new (m, n) float64 array.

    Raises
    ------
    InvalidValueError : non-numeric, empty, ragged, not 2-D, NaN or ±inf
    NotSquareError    : ``square`` was requested and rows != columns
    """
    M = _as_numeric_array(A, name)
    if M.ndim != 2:
        raise InvalidValueError(
            f"{name} must be a 2-D matrix (list of equal-length rows), got ndim={M.ndim}"
        )
    rows, cols = M.shape
    if rows == 0 or cols == 0:
        raise InvalidValueError(f"{name} must have at least one row and one column")

    M = M.astype(np.float64, copy=True)
    bad = ~np.isfinite(M)
    if bad.any():
        i, j = (int(k) for k in np.argwhere(bad)[0])
        raise InvalidValueError(
            f"{name}[{i}][{j}] must be a finite number, got {M[i, j]}",
            row=i,
            column=j,
        )

    if square and rows != cols:
        raise NotSquareError(
            f"{name} must be square but has {rows} rows and {cols} columns",
            shape=(rows, cols),
        )
    return M


def as_vector(v, name: str = "vector") -> np.ndarray:
    """Validate ``v`` and return it as a new non-empty finite (n,) float64 array."""
    x = _as_numeric_array(v, name)
    if x.ndim != 1:
        raise InvalidValueError(f"{name} must be 1-D, got ndim={x.ndim}")
    if x.size == 0:
        raise InvalidValueError(f"{name} must not be empty")

    x = x.astype(np.float64, copy=True)
    bad = ~np.isfinite(x)
    if bad.any():
        i = int(np.flatnonzero(bad)[0])
        raise InvalidValueError(
            f"{name}[{i}] must be a finite number, got {x[i]}", column=i
        )
    return x


def assert_same_shape(a: np.ndarray, b: np.ndarray, operation: str) -> None:
    """Element-wise operations need identical dimensions."""
    if a.shape != b.shape:
        raise DimensionMismatchError(
            f"Matrices must have identical dimensions for {operation}. "
            f"Matrix A is {a.shape[0]}×{a.shape[1]}, Matrix B is {b.shape[0]}×{b.shape[1]}",
            shape_a=a.shape,
            shape_b=b.shape,
        )


def assert_finite_scalar(value, name: str = "scalar") -> float:
    """Return ``value`` as a float, rejecting bools, non-reals and NaN/±inf."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidValueError(f"{name} must be a real number, got {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidValueError(f"{name} must be a finite number, got {value}")
    return value


def assert_index(index, upper: int, name: str = "index") -> int:
    """Return ``index`` as an int in ``[0, upper)``."""
    if isinstance(index, bool) or not isinstance(index, numbers.Integral):
        raise InvalidValueError(f"{name} must be an integer, got {index!r}")
    if not 0 <= index < upper:
        raise InvalidValueError(f"{name} must be in range [0, {upper}), got {index}")
    return int(index)
