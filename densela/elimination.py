# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from .exceptions import DimensionMismatchError, InvalidValueError, SingularMatrixError
from .utils import EPS, RANK_TOL, scale_tol
from .validation import as_matrix

logger = logging.getLogger(__name__)


class LUResult(NamedTuple):
    L: np.ndarray
    U: np.ndarray


class PLUResult(NamedTuple):
    P: np.ndarray
    L: np.ndarray
    U: np.ndarray


def lu(A, tol: float = EPS) -> LUResult:
    """
    Doolittle LU factorisation A = L U, L unit lower-triangular.

    No row exchanges are made, so an invertible matrix whose natural pivot
    vanishes (e.g. [[0, 1], [1, 0]]) is reported as singular. Use ``plu``
    when that matters.

    Parameters
    ----------
    A : (n, n) array-like
    tol : float
        Pivots with |U[i, i]| < tol are treated as zero.

    Returns
    -------
    LUResult(L, U)

    Raises
    ------
    NotSquareError
    SingularMatrixError : with ``index`` set to the failing pivot
    """
    A = as_matrix(A, square=True)
    n = A.shape[0]
    L = np.eye(n)
    U = np.zeros((n, n))

    for i in range(n):
        # row i of U
        U[i, i:] = A[i, i:] - L[i, :i] @ U[:i, i:]

        pivot = U[i, i]
        if abs(pivot) < tol:
            raise SingularMatrixError(
                f"Matrix is singular (zero pivot element U[{i}][{i}] = {pivot:.3e})",
                index=i,
                value=float(pivot),
            )

        # column i of L
        L[i + 1 :, i] = (A[i + 1 :, i] - L[i + 1 :, :i] @ U[:i, i]) / pivot

    return LUResult(L, U)


def plu(A, tol: Optional[float] = None) -> PLUResult:
    """
    LU with partial pivoting: P A = L U.

    Same contract as ``lu`` except that the row of largest magnitude is
    swapped into the pivot position at every step. ``tol`` defaults to a
    threshold scaled to ‖A‖∞.
    """
    A = as_matrix(A, square=True)
    n = A.shape[0]
    if tol is None:
        tol = scale_tol(A)

    U = A.copy()
    L = np.eye(n)
    perm = np.arange(n)

    for k in range(n):
        p = k + int(np.abs(U[k:, k]).argmax())
        if abs(U[p, k]) <= tol:
            raise SingularMatrixError(
                f"Matrix is singular (no usable pivot in column {k})",
                index=k,
                value=float(U[p, k]),
            )
        if p != k:
            U[[k, p]] = U[[p, k]]
            # multipliers already computed travel with their rows
            L[[k, p], :k] = L[[p, k], :k]
            perm[[k, p]] = perm[[p, k]]

        factors = U[k + 1 :, k] / U[k, k]
        L[k + 1 :, k] = factors
        U[k + 1 :, k:] -= factors[:, None] * U[k, k:]
        U[k + 1 :, k] = 0.0

    P = np.eye(n)[perm]
    return PLUResult(P, L, U)


def _as_rhs(b, n: int, name: str = "b") -> np.ndarray:
    B = np.asarray(b)
    if B.ndim == 1:
        B = as_matrix(B[:, None], name)
    else:
        B = as_matrix(B, name)
    if B.shape[0] != n:
        raise DimensionMismatchError(
            f"{name} has {B.shape[0]} rows but the system has {n} equations",
            shape_a=(n, n),
            shape_b=B.shape,
        )
    return B


def forward_substitute(L, b, unit_diagonal: bool = True) -> np.ndarray:
    """
    Solve L y = b for lower-triangular L.

    With ``unit_diagonal`` the diagonal of L is taken to be 1 and never read,
    which is the shape Doolittle produces.
    """
    L = as_matrix(L, "L", square=True)
    n = L.shape[0]
    squeeze = np.ndim(b) == 1
    B = _as_rhs(b, n)
    y = np.zeros_like(B)

    for i in range(n):
        s = B[i] - L[i, :i] @ y[:i]
        if unit_diagonal:
            y[i] = s
            continue
        if L[i, i] == 0.0:
            raise SingularMatrixError(
                f"Zero on the diagonal of L at [{i}][{i}]", index=i, value=0.0
            )
        y[i] = s / L[i, i]

    return y.ravel() if squeeze else y


def back_substitute(U, y) -> np.ndarray:
    """
    Solve U x = y for upper-triangular U.

    Parameters
    ----------
    U : (n, n) array-like
    y : (n,) or (n, k) array-like

    Returns
    -------
    x : same shape as y

    Raises
    ------
    SingularMatrixError : U has an exactly-zero diagonal entry
    """
    U = as_matrix(U, "U", square=True)
    n = U.shape[0]
    squeeze = np.ndim(y) == 1
    Y = _as_rhs(y, n, "y")
    x = np.zeros_like(Y)

    for i in reversed(range(n)):
        pivot = U[i, i]
        if pivot == 0.0:
            raise SingularMatrixError(
                f"Zero on the diagonal of U at [{i}][{i}]", index=i, value=0.0
            )
        x[i] = (Y[i] - U[i, i + 1 :] @ x[i + 1 :]) / pivot

    return x.ravel() if squeeze else x


def solve(A, b, pivot: bool = False) -> np.ndarray:
    """
    Solve A x = b through LU, forward and back substitution.

    Parameters
    ----------
    A : (n, n) array-like
    b : (n,) or (n, k) array-like
    pivot : bool
        Factor with ``plu`` instead of ``lu``.

    Returns
    -------
    x : same shape as b
    """
    A = as_matrix(A, square=True)
    n = A.shape[0]
    squeeze = np.ndim(b) == 1
    B = _as_rhs(b, n)

    if pivot:
        P, L, U = plu(A)
        B = P @ B
    else:
        L, U = lu(A)

    y = forward_substitute(L, B)
    x = back_substitute(U, y)
    return x.ravel() if squeeze else x


def forward_eliminate(
    A,
    b=None,
    tol: Optional[float] = None,
) -> Tuple[np.ndarray, Optional[np.ndarray], List[int], List[int], List[int]]:
    """
    Row-echelon reduction with partial pivoting on an m by n matrix A.

    Parameters
    ----------
    A : (m, n) array-like
    b : (m,) or (m, k) array-like, optional
        Right-hand side; receives the same row swaps and updates.
    tol : float, optional
        Column entries at or below this magnitude count as zero.
        Defaults to a threshold scaled to ‖A‖∞.

    Returns
    -------
    U      : (m, n) ndarray, row-echelon form of A (not reduced)
    c      : b after identical row operations, (m, k), or None
    pivots : column indices holding a pivot; len = rank(A)
    free   : column indices without one
    perm   : row i of U comes from original row perm[i]
    """
    U = as_matrix(A)
    m, n = U.shape

    c = None
    if b is not None:
        c = np.asarray(b)
        c = as_matrix(c[:, None] if c.ndim == 1 else c, "b")
        if c.shape[0] != m:
            raise DimensionMismatchError(
                f"b has {c.shape[0]} rows but A has {m}", shape_a=U.shape, shape_b=c.shape
            )

    if tol is None:
        tol = scale_tol(U)
    elif tol < 0:
        raise InvalidValueError("tol must be non-negative")

    perm = list(range(m))
    pivots: List[int] = []
    free: List[int] = []

    row = 0
    for col in range(n):
        if row == m:
            free.extend(range(col, n))
            break
        # largest magnitude below the current row is the most stable pivot
        col_slice = np.abs(U[row:, col])
        max_idx = int(col_slice.argmax())
        if col_slice[max_idx] <= tol:
            free.append(col)
            continue

        pivot_row = row + max_idx
        if pivot_row != row:
            U[[row, pivot_row]] = U[[pivot_row, row]]
            if c is not None:
                c[[row, pivot_row]] = c[[pivot_row, row]]
            perm[row], perm[pivot_row] = perm[pivot_row], perm[row]

        pivots.append(col)

        factors = U[row + 1 :, col] / U[row, col]
        U[row + 1 :, col:] -= factors[:, None] * U[row, col:]
        U[row + 1 :, col] = 0.0
        if c is not None:
            c[row + 1 :, :] -= factors[:, None] * c[row, :]

        row += 1

    return U, c, pivots, free, perm


def rank(A, tol: float = RANK_TOL) -> int:
    """Matrix rank is the number of pivot columns"""
    M = as_matrix(A)
    pivots = forward_eliminate(M, tol=scale_tol(M, tol))[2]
    logger.debug("rank(): %d pivots in a %dx%d matrix", len(pivots), *M.shape)
    return len(pivots)
