# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
densela
=======

Dense real linear algebra on NumPy arrays, written out by hand: Strassen
multiplication, cofactor determinants, Gram-Schmidt, and the LU / Cholesky /
QR / eigen / SVD decompositions built on top of each other.

Public API
~~~~~~~~~~
- Construction and queries
    - `create`, `identity`, `size`, `is_symmetric`, `equals`, `trace`, ...
- Arithmetic
    - `add`, `subtract`, `multiply`, `matrix_multiply`, `strassen`
- Matrix functions
    - `det`, `minor`, `cofactor`, `adj`, `inverse`
- Projections
    - `normalize`, `project`, `gram_schmidt`, `orthonormalize`
- Decompositions
    - `lu`, `plu`, `cholesky`, `qr`, `eigen`, `svd`
- Linear systems
    - `solve`, `forward_substitute`, `back_substitute`, `least_squares_qr`
- Norms
    - `frobenius_norm`, `spectral_norm`, `one_norm`, `infinity_norm`,
      `nuclear_norm`, `max_norm`, `p_norm`

Homogeneous transforms live in `densela.transformations` and the timing
harness in `densela.benchmark` (needs pandas).

Example
-------
>>> import numpy as np, densela as dl
>>> A = np.random.randn(5, 3)
>>> Q, R = dl.qr(A)
>>> np.allclose(Q @ R, A)
True
"""

from importlib.metadata import version as _pkg_version

from .arithmetic import (
    add,
    matrix_multiply,
    multiply,
    scalar_multiply,
    strassen,
    subtract,
    vector_multiply,
)
from .cholesky import cholesky
from .core import (
    clone,
    create,
    equals,
    identity,
    is_diagonal,
    is_identity,
    is_square,
    is_symmetric,
    is_valid,
    is_zero,
    map_elements,
    size,
    size_square,
    to_string,
    trace,
    transpose,
)
from .eigen import EigenResult, eigen, eigen_qr_iteration
from .elimination import (
    LUResult,
    PLUResult,
    back_substitute,
    forward_eliminate,
    forward_substitute,
    lu,
    plu,
    rank,
    solve,
)
from .exceptions import (
    ComplexEigenvaluesError,
    DimensionMismatchError,
    InvalidValueError,
    LinearlyDependentColumnsError,
    MatrixError,
    NotPositiveDefiniteError,
    NotSquareError,
    NumericalError,
    SingularMatrixError,
    ValidationError,
)
from .matrix_functions import adj, cofactor, cofactor_matrix, det, inverse, minor
from .norms import (
    frobenius_norm,
    infinity_norm,
    max_norm,
    nuclear_norm,
    one_norm,
    p_norm,
    spectral_norm,
)
from .projections import gram_schmidt, normalize, orthonormalize, project
from .qr import QRResult, least_squares_qr, qr
from .svd import SVDResult, svd

__all__ = [
    # core
    "create",
    "identity",
    "size",
    "size_square",
    "is_valid",
    "is_square",
    "is_zero",
    "is_identity",
    "is_symmetric",
    "is_diagonal",
    "clone",
    "equals",
    "to_string",
    "trace",
    "transpose",
    "map_elements",
    # arithmetic
    "add",
    "subtract",
    "scalar_multiply",
    "vector_multiply",
    "matrix_multiply",
    "multiply",
    "strassen",
    # matrix functions
    "det",
    "minor",
    "cofactor",
    "cofactor_matrix",
    "adj",
    "inverse",
    # projections
    "normalize",
    "project",
    "gram_schmidt",
    "orthonormalize",
    # decompositions and solvers
    "lu",
    "plu",
    "LUResult",
    "PLUResult",
    "forward_substitute",
    "back_substitute",
    "forward_eliminate",
    "solve",
    "rank",
    "cholesky",
    "qr",
    "QRResult",
    "least_squares_qr",
    "eigen",
    "eigen_qr_iteration",
    "EigenResult",
    "svd",
    "SVDResult",
    # norms
    "frobenius_norm",
    "spectral_norm",
    "one_norm",
    "infinity_norm",
    "nuclear_norm",
    "max_norm",
    "p_norm",
    # errors
    "MatrixError",
    "ValidationError",
    "InvalidValueError",
    "DimensionMismatchError",
    "NotSquareError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "ComplexEigenvaluesError",
    "LinearlyDependentColumnsError",
]

# ---------------------------------------------------------------------
# Version string (helps "pip show densela", Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Library logging stays silent unless the application configures it.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
