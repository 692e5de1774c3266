# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exception hierarchy for densela.

Everything derives from MatrixError, which is itself a ValueError so callers
that only know about ValueError keep working.

    MatrixError
    ├── ValidationError          bad input, raised before any computation
    │   ├── InvalidValueError
    │   ├── DimensionMismatchError
    │   └── NotSquareError
    └── NumericalError           raised at the step where it is detected
        ├── SingularMatrixError
        ├── NotPositiveDefiniteError
        ├── ComplexEigenvaluesError
        └── LinearlyDependentColumnsError
"""

from typing import Optional, Tuple


class MatrixError(ValueError):
    """Base exception for all densela errors."""


class ValidationError(MatrixError):
    """An operand failed its input contract."""


class InvalidValueError(ValidationError):
    """
    NaN, infinite or non-numeric data, a malformed (empty / ragged) matrix,
    or an out-of-range parameter.

    Attributes:
        row, column: position of the offending element, if known
    """

    def __init__(
        self,
        message: str,
        row: Optional[int] = None,
        column: Optional[int] = None,
    ):
        super().__init__(message)
        self.row = row
        self.column = column


class DimensionMismatchError(ValidationError):
    """
    Operand shapes are incompatible for the requested operation.

    Attributes:
        shape_a, shape_b: the shapes that were compared, if available
    """

    def __init__(
        self,
        message: str,
        shape_a: Optional[Tuple[int, ...]] = None,
        shape_b: Optional[Tuple[int, ...]] = None,
    ):
        super().__init__(message)
        self.shape_a = shape_a
        self.shape_b = shape_b


class NotSquareError(ValidationError):
    """A square-only operation was given a rectangular matrix."""

    def __init__(self, message: str, shape: Optional[Tuple[int, ...]] = None):
        super().__init__(message)
        self.shape = shape


class NumericalError(MatrixError):
    """Base class for failures that only show up mid-algorithm."""


class SingularMatrixError(NumericalError):
    """
    Zero or near-zero pivot, or a vanishing determinant.

    Attributes:
        index: pivot row/column where singularity was detected
        value: the offending pivot or determinant
    """

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        value: Optional[float] = None,
    ):
        super().__init__(message)
        self.index = index
        self.value = value


class NotPositiveDefiniteError(NumericalError):
    """
    Cholesky was given a matrix that is not symmetric positive definite.

    Attributes:
        row, column: element being computed when the failure was detected
        value: the non-positive reduced diagonal (or tiny pivot)
    """

    def __init__(
        self,
        message: str,
        row: Optional[int] = None,
        column: Optional[int] = None,
        value: Optional[float] = None,
    ):
        super().__init__(message)
        self.row = row
        self.column = column
        self.value = value


class ComplexEigenvaluesError(NumericalError):
    """The characteristic polynomial has complex roots (real-only engine)."""

    def __init__(self, message: str, discriminant: Optional[float] = None):
        super().__init__(message)
        self.discriminant = discriminant


class LinearlyDependentColumnsError(NumericalError):
    """
    A column lies (numerically) in the span of the columns before it.

    Attributes:
        column: index of the dependent column
        norm: norm of its residual after orthogonalization
    """

    def __init__(
        self,
        message: str,
        column: Optional[int] = None,
        norm: Optional[float] = None,
    ):
        super().__init__(message)
        self.column = column
        self.norm = norm
