# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np

# Default tolerances. These are only ever used as keyword defaults; every
# routine takes its tolerance as an argument.
EPS: float = 1e-12
EIGEN_TOL: float = 1e-10
EIGEN_MAX_ITER: int = 50
GRAM_SCHMIDT_TOL: float = 1e-10
RANK_TOL: float = 1e-10
EQUALS_TOL: float = 1e-8
ZERO_TOL: float = 1e-14

# Square products at or above this side length go through Strassen
STRASSEN_THRESHOLD: int = 32


def scale_tol(A: np.ndarray, eps: float = EPS) -> float:
    """Return an absolute tolerance scaled to the matrix magnitude."""
    return eps * max(1.0, np.linalg.norm(A, ord=np.inf))


def random_nonsingular_upper(n, low=-100, high=100, seed=None) -> np.ndarray:
    """
    Build a matrix U that is upper-triangular with random entries
    everywhere and put only non-zero values on its diagonal

    Returns
    -------
    Matrix with float64 dtype
    """
    rng = np.random.default_rng(seed)
    U = rng.uniform(low, high, size=(n, n))
    # enforce upper-triangular
    U = np.triu(U)
    # keep the diagonal away from zero so every Doolittle pivot is usable
    diag = rng.uniform(1.0, high, size=n) * rng.choice([-1.0, 1.0], size=n)
    U[np.diag_indices(n)] = diag
    return np.asarray(U)


def random_orthogonal(n, seed=None) -> np.ndarray:
    """Random n×n orthogonal matrix (Q factor of a Gaussian matrix)."""
    rng = np.random.default_rng(seed)
    Q, R = np.linalg.qr(rng.standard_normal((n, n)))
    # sign fix makes the distribution uniform (Haar)
    return Q * np.sign(np.diag(R))


def random_spd(n, low=1.0, high=10.0, seed=None) -> np.ndarray:
    """
    Symmetric positive-definite matrix Q·diag(λ)·Qᵀ with eigenvalues drawn
    from [low, high).
    """
    rng = np.random.default_rng(seed)
    Q = random_orthogonal(n, seed=rng.integers(2**32))
    lam = rng.uniform(low, high, size=n)
    A = (Q * lam) @ Q.T
    # exact symmetry, not just up to rounding
    return (A + A.T) / 2
