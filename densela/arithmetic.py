# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Element-wise arithmetic and the multiplication engine.

Matrix products are routed by shape:

- square × square, side 1..4  -> fully unrolled closed-form kernels
- square × square, side >= 32 -> Strassen (seven products per level)
- anything else               -> row-wise accumulation, skipping zero
                                 multiplicands of A
"""

import logging
import numbers

import numpy as np

from .exceptions import DimensionMismatchError, InvalidValueError
from .utils import STRASSEN_THRESHOLD
from .validation import as_matrix, as_vector, assert_finite_scalar, assert_same_shape

logger = logging.getLogger(__name__)


def add(a, b) -> np.ndarray:
    """C[i,j] = A[i,j] + B[i,j]"""
    a = as_matrix(a, "a")
    b = as_matrix(b, "b")
    assert_same_shape(a, b, "addition")
    return a + b


def subtract(a, b) -> np.ndarray:
    """C[i,j] = A[i,j] - B[i,j]"""
    a = as_matrix(a, "a")
    b = as_matrix(b, "b")
    assert_same_shape(a, b, "subtraction")
    return a - b


def scalar_multiply(A, scalar) -> np.ndarray:
    A = as_matrix(A)
    scalar = assert_finite_scalar(scalar, "Scalar multiplier")
    return A * scalar


def vector_multiply(A, v) -> np.ndarray:
    """
    Matrix-vector product A·v.

    Returns
    -------
    (rows,) ndarray
    """
    A = as_matrix(A)
    v = as_vector(v)
    rows, cols = A.shape
    if cols != v.shape[0]:
        raise DimensionMismatchError(
            f"Matrix-vector multiplication requires matrix columns ({cols}) "
            f"to equal vector length ({v.shape[0]})",
            shape_a=A.shape,
            shape_b=v.shape,
        )
    out = np.zeros(rows, dtype=np.float64)
    for i in range(rows):
        out[i] = A[i] @ v
    return out


def matrix_multiply(a, b, threshold: int = STRASSEN_THRESHOLD) -> np.ndarray:
    """
    Matrix-matrix product A·B, requires A.columns == B.rows.

    Parameters
    ----------
    threshold : int
        Square products whose side is at least this large use Strassen.
    """
    a = as_matrix(a, "a")
    b = as_matrix(b, "b")
    if a.shape[1] != b.shape[0]:
        raise DimensionMismatchError(
            f"Matrix multiplication requires A columns ({a.shape[1]}) to equal "
            f"B rows ({b.shape[0]}). Matrix A is {a.shape[0]}×{a.shape[1]}, "
            f"Matrix B is {b.shape[0]}×{b.shape[1]}",
            shape_a=a.shape,
            shape_b=b.shape,
        )
    threshold = _check_threshold(threshold)
    n = a.shape[0]
    if a.shape == b.shape and a.shape[1] == n and n > 4 and n >= threshold:
        logger.debug("matrix_multiply(): %dx%d product via Strassen", n, n)
    return _multiply(a, b, threshold)


def multiply(A, operand):
    """
    Dispatch on the operand: real scalar, vector (1-D) or matrix (2-D).
    """
    if isinstance(operand, numbers.Real) and not isinstance(operand, bool):
        return scalar_multiply(A, operand)
    if operand is None or isinstance(operand, (bool, str, bytes)):
        raise InvalidValueError(
            f"Cannot multiply a matrix by {type(operand).__name__}"
        )
    try:
        ndim = np.ndim(operand)
    except ValueError as e:
        # ragged nesting
        raise InvalidValueError(f"Cannot interpret multiplication operand: {e}") from e
    if ndim == 0:
        return scalar_multiply(A, np.asarray(operand).item())
    if ndim == 1:
        return vector_multiply(A, operand)
    if ndim == 2:
        return matrix_multiply(A, operand)
    raise InvalidValueError(f"Multiplication operand must be 0-, 1- or 2-D, got ndim={ndim}")


def strassen(a, b, threshold: int = STRASSEN_THRESHOLD) -> np.ndarray:
    """
    Strassen's algorithm for two n×n matrices.

    Each level partitions A and B into quadrant views and forms

        M1 = (A11+A22)(B11+B22)    M2 = (A21+A22)B11      M3 = A11(B12-B22)
        M4 = A22(B21-B11)          M5 = (A11+A12)B22      M6 = (A21-A11)(B11+B12)
        M7 = (A12-A22)(B21+B22)

    then C11 = M1+M4-M5+M7, C12 = M3+M5, C21 = M2+M4, C22 = M1+M3-M2+M6.
    Odd sides are zero-padded by one and the result truncated back. The
    recursion bottoms out at n < threshold on the ordinary multiplier.

    Seven multiplications instead of eight gives O(n^2.807), paid for with
    extra additions and therefore slightly larger rounding error.
    """
    a = as_matrix(a, "a", square=True)
    b = as_matrix(b, "b", square=True)
    if a.shape != b.shape:
        raise DimensionMismatchError(
            f"Matrix dimensions incompatible for multiplication: "
            f"{a.shape[0]}×{a.shape[1]} and {b.shape[0]}×{b.shape[1]}",
            shape_a=a.shape,
            shape_b=b.shape,
        )
    threshold = _check_threshold(threshold)
    logger.debug("strassen(): n=%d, threshold=%d", a.shape[0], threshold)
    return _strassen(a, b, threshold)


# ---------------------------------------------------------------------
# Kernels. Everything below works on validated float64 arrays (or views
# of them) and never re-validates.
# ---------------------------------------------------------------------


def _check_threshold(threshold) -> int:
    # a cut-over of 1 would pad 1x1 blocks forever
    if isinstance(threshold, bool) or not isinstance(threshold, (int, np.integer)) or threshold < 2:
        raise InvalidValueError(f"Strassen threshold must be an integer >= 2, got {threshold!r}")
    return int(threshold)


def _multiply(a: np.ndarray, b: np.ndarray, threshold: int) -> np.ndarray:
    n, inner = a.shape
    if a.shape == b.shape and n == inner:
        if n <= 4:
            return _UNROLLED[n](a, b)
        if n >= threshold:
            return _strassen(a, b, threshold)
    return _multiply_standard(a, b)


def _multiply_standard(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """C[i,:] = Σ_k A[i,k]·B[k,:], skipping exact zeros of A."""
    rows, inner = a.shape
    out = np.zeros((rows, b.shape[1]), dtype=np.float64)
    for i in range(rows):
        acc = out[i]
        for k in range(inner):
            aik = a[i, k]
            if aik == 0.0:
                continue
            acc += aik * b[k]
    return out


def _strassen(a: np.ndarray, b: np.ndarray, threshold: int) -> np.ndarray:
    n = a.shape[0]
    if n < threshold:
        return _multiply(a, b, threshold)

    if n % 2:
        a_pad = np.pad(a, ((0, 1), (0, 1)))
        b_pad = np.pad(b, ((0, 1), (0, 1)))
        return _strassen(a_pad, b_pad, threshold)[:n, :n].copy()

    h = n // 2
    # quadrant views into the parent buffers, nothing is copied here
    a11, a12, a21, a22 = a[:h, :h], a[:h, h:], a[h:, :h], a[h:, h:]
    b11, b12, b21, b22 = b[:h, :h], b[:h, h:], b[h:, :h], b[h:, h:]

    m1 = _strassen(a11 + a22, b11 + b22, threshold)
    m2 = _strassen(a21 + a22, b11, threshold)
    m3 = _strassen(a11, b12 - b22, threshold)
    m4 = _strassen(a22, b21 - b11, threshold)
    m5 = _strassen(a11 + a12, b22, threshold)
    m6 = _strassen(a21 - a11, b11 + b12, threshold)
    m7 = _strassen(a12 - a22, b21 + b22, threshold)

    c = np.empty((n, n), dtype=np.float64)
    c[:h, :h] = m1 + m4 - m5 + m7
    c[:h, h:] = m3 + m5
    c[h:, :h] = m2 + m4
    c[h:, h:] = m1 + m3 - m2 + m6
    return c


def _multiply_1(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.array([[a[0, 0] * b[0, 0]]])


def _multiply_2(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.array(
        [
            [
                a[0, 0] * b[0, 0] + a[0, 1] * b[1, 0],
                a[0, 0] * b[0, 1] + a[0, 1] * b[1, 1],
            ],
            [
                a[1, 0] * b[0, 0] + a[1, 1] * b[1, 0],
                a[1, 0] * b[0, 1] + a[1, 1] * b[1, 1],
            ],
        ]
    )


def _multiply_3(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.array(
        [
            [
                a[0, 0] * b[0, 0] + a[0, 1] * b[1, 0] + a[0, 2] * b[2, 0],
                a[0, 0] * b[0, 1] + a[0, 1] * b[1, 1] + a[0, 2] * b[2, 1],
                a[0, 0] * b[0, 2] + a[0, 1] * b[1, 2] + a[0, 2] * b[2, 2],
            ],
            [
                a[1, 0] * b[0, 0] + a[1, 1] * b[1, 0] + a[1, 2] * b[2, 0],
                a[1, 0] * b[0, 1] + a[1, 1] * b[1, 1] + a[1, 2] * b[2, 1],
                a[1, 0] * b[0, 2] + a[1, 1] * b[1, 2] + a[1, 2] * b[2, 2],
            ],
            [
                a[2, 0] * b[0, 0] + a[2, 1] * b[1, 0] + a[2, 2] * b[2, 0],
                a[2, 0] * b[0, 1] + a[2, 1] * b[1, 1] + a[2, 2] * b[2, 1],
                a[2, 0] * b[0, 2] + a[2, 1] * b[1, 2] + a[2, 2] * b[2, 2],
            ],
        ]
    )


def _multiply_4(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    # row 3 is the homogeneous row for 3-D transforms
    return np.array(
        [
            [
                a[0, 0] * b[0, 0] + a[0, 1] * b[1, 0] + a[0, 2] * b[2, 0] + a[0, 3] * b[3, 0],
                a[0, 0] * b[0, 1] + a[0, 1] * b[1, 1] + a[0, 2] * b[2, 1] + a[0, 3] * b[3, 1],
                a[0, 0] * b[0, 2] + a[0, 1] * b[1, 2] + a[0, 2] * b[2, 2] + a[0, 3] * b[3, 2],
                a[0, 0] * b[0, 3] + a[0, 1] * b[1, 3] + a[0, 2] * b[2, 3] + a[0, 3] * b[3, 3],
            ],
            [
                a[1, 0] * b[0, 0] + a[1, 1] * b[1, 0] + a[1, 2] * b[2, 0] + a[1, 3] * b[3, 0],
                a[1, 0] * b[0, 1] + a[1, 1] * b[1, 1] + a[1, 2] * b[2, 1] + a[1, 3] * b[3, 1],
                a[1, 0] * b[0, 2] + a[1, 1] * b[1, 2] + a[1, 2] * b[2, 2] + a[1, 3] * b[3, 2],
                a[1, 0] * b[0, 3] + a[1, 1] * b[1, 3] + a[1, 2] * b[2, 3] + a[1, 3] * b[3, 3],
            ],
            [
                a[2, 0] * b[0, 0] + a[2, 1] * b[1, 0] + a[2, 2] * b[2, 0] + a[2, 3] * b[3, 0],
                a[2, 0] * b[0, 1] + a[2, 1] * b[1, 1] + a[2, 2] * b[2, 1] + a[2, 3] * b[3, 1],
                a[2, 0] * b[0, 2] + a[2, 1] * b[1, 2] + a[2, 2] * b[2, 2] + a[2, 3] * b[3, 2],
                a[2, 0] * b[0, 3] + a[2, 1] * b[1, 3] + a[2, 2] * b[2, 3] + a[2, 3] * b[3, 3],
            ],
            [
                a[3, 0] * b[0, 0] + a[3, 1] * b[1, 0] + a[3, 2] * b[2, 0] + a[3, 3] * b[3, 0],
                a[3, 0] * b[0, 1] + a[3, 1] * b[1, 1] + a[3, 2] * b[2, 1] + a[3, 3] * b[3, 1],
                a[3, 0] * b[0, 2] + a[3, 1] * b[1, 2] + a[3, 2] * b[2, 2] + a[3, 3] * b[3, 2],
                a[3, 0] * b[0, 3] + a[3, 1] * b[1, 3] + a[3, 2] * b[2, 3] + a[3, 3] * b[3, 3],
            ],
        ]
    )


_UNROLLED = {1: _multiply_1, 2: _multiply_2, 3: _multiply_3, 4: _multiply_4}
