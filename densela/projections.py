#!/usr/bin/python3
# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Projection operations and Gram-Schmidt orthogonalization
"""

from typing import List, Optional, Sequence

import numpy as np

from .exceptions import InvalidValueError, LinearlyDependentColumnsError
from .utils import GRAM_SCHMIDT_TOL
from .validation import as_matrix, as_vector


def normalize(v) -> np.ndarray:
    """
    Unit vector in the direction of v.

    Raises
    ------
    InvalidValueError : v has zero or infinite magnitude
    """
    v = as_vector(v)
    norm = np.linalg.norm(v)
    if norm == 0.0 or not np.isfinite(norm):
        raise InvalidValueError(f"Cannot normalize a vector of magnitude {norm}")
    return v / norm


def project(v, onto) -> np.ndarray:
    """
    Find p, the orthogonal projection of v onto the line spanned by ``onto``.
    """
    v = as_vector(v, "v")
    onto = as_vector(onto, "onto")
    if v.shape != onto.shape:
        raise InvalidValueError(
            f"Cannot project a length-{v.shape[0]} vector onto a length-{onto.shape[0]} vector"
        )
    denom = onto @ onto
    if denom == 0.0:
        raise InvalidValueError("Cannot project onto the zero vector")
    return (v @ onto) / denom * onto


def complement_vector(
    basis: np.ndarray, tol: float = GRAM_SCHMIDT_TOL
) -> Optional[np.ndarray]:
    """
    Return a unit vector orthogonal to the (orthonormal) columns of ``basis``,
    trying the standard basis vectors e_0, e_1, ... in turn. ``None`` when
    the columns already span the whole space.
    """
    m, k = basis.shape
    for trial in range(m):
        candidate = np.zeros(m)
        candidate[trial] = 1.0
        # two passes: one is not enough once k is close to m
        for _ in range(2):
            for j in range(k):
                candidate -= (basis[:, j] @ candidate) * basis[:, j]
        norm = np.linalg.norm(candidate)
        if norm > tol:
            return candidate / norm
    return None


def gram_schmidt(
    A,
    normalize: bool = True,
    complete: bool = False,
    tol: float = GRAM_SCHMIDT_TOL,
) -> np.ndarray:
    """
    Orthogonalize the columns of A in order.

    Each column has its projections onto all previously produced columns
    subtracted, and is then (optionally) scaled to unit length.

    Parameters
    ----------
    A : (m, n) array-like
    normalize : bool
        Scale every output column to unit length.
    complete : bool
        Replace a (near-)zero residual with a unit vector orthogonal to all
        previous columns instead of raising. Needs ``normalize``.
    tol : float
        Residual norm at or below which a column counts as dependent.

    Returns
    -------
    Q : (m, n) ndarray

    Raises
    ------
    LinearlyDependentColumnsError : a residual vanished and ``complete`` is off,
        or ``complete`` is on but n > m leaves no room for another direction.
    """
    A = as_matrix(A)
    if complete and not normalize:
        raise InvalidValueError("complete=True requires normalize=True")
    m, n = A.shape
    Q = np.zeros_like(A)

    for j in range(n):
        v = A[:, j].copy()
        for k in range(j):
            q = Q[:, k]
            denom = 1.0 if normalize else q @ q
            v -= (q @ v) / denom * q
        norm = np.linalg.norm(v)

        if norm <= tol:
            if not complete:
                raise LinearlyDependentColumnsError(
                    f"Column {j} is linearly dependent on previous columns "
                    f"(residual norm {norm:.3e})",
                    column=j,
                    norm=float(norm),
                )
            substitute = complement_vector(Q[:, :j], tol)
            if substitute is None:
                raise LinearlyDependentColumnsError(
                    f"Unable to find an orthonormal vector for column {j}: "
                    f"{j} columns already span R^{m}",
                    column=j,
                    norm=float(norm),
                )
            Q[:, j] = substitute
            continue

        Q[:, j] = v / norm if normalize else v
    return Q


def orthonormalize(
    vectors: Sequence, complete: bool = False, tol: float = GRAM_SCHMIDT_TOL
) -> List[np.ndarray]:
    """Gram-Schmidt on a sequence of equal-length vectors."""
    cols = [as_vector(v, f"vectors[{i}]") for i, v in enumerate(vectors)]
    if not cols:
        raise InvalidValueError("Need at least one vector to orthonormalize")
    if any(c.shape != cols[0].shape for c in cols):
        raise InvalidValueError("All vectors must have the same length")
    Q = gram_schmidt(np.column_stack(cols), complete=complete, tol=tol)
    return [Q[:, j].copy() for j in range(Q.shape[1])]
