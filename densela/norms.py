# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Matrix norms. The spectral and nuclear norms come from ``svd``; the rest are
element-wise reductions.
"""

import math

import numpy as np

from .exceptions import InvalidValueError
from .svd import svd
from .validation import as_matrix


def frobenius_norm(A) -> float:
    """sqrt(Σ a_ij²)"""
    M = as_matrix(A)
    return float(np.sqrt(np.sum(M * M)))


def spectral_norm(A) -> float:
    """Largest singular value (the induced 2-norm)."""
    return float(svd(A).S.max())


def one_norm(A) -> float:
    """Maximum absolute column sum."""
    return float(np.abs(as_matrix(A)).sum(axis=0).max())


def infinity_norm(A) -> float:
    """Maximum absolute row sum."""
    return float(np.abs(as_matrix(A)).sum(axis=1).max())


def nuclear_norm(A) -> float:
    """Sum of the singular values."""
    return float(svd(A).S.sum())


def max_norm(A) -> float:
    return float(np.abs(as_matrix(A)).max())


def p_norm(A, p: float) -> float:
    """
    Entry-wise p-norm (Σ |a_ij|^p)^(1/p), p >= 1.

    p = 2 is the Frobenius norm and p = ∞ the max norm.
    """
    M = as_matrix(A)
    if isinstance(p, bool) or not isinstance(p, (int, float, np.integer, np.floating)):
        raise InvalidValueError(f"p must be a real number, got {p!r}")
    if math.isnan(p) or p < 1:
        raise InvalidValueError(f"p-norm parameter must be >= 1, got {p}")
    if math.isinf(p):
        return max_norm(M)
    return float(np.sum(np.abs(M) ** p) ** (1.0 / p))
