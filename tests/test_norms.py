# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import math

import numpy as np
import pytest

from densela.exceptions import InvalidValueError
from densela.norms import (
    frobenius_norm,
    infinity_norm,
    max_norm,
    nuclear_norm,
    one_norm,
    p_norm,
    spectral_norm,
)
from densela.utils import random_orthogonal

A = np.array([[1.0, -2.0, 3.0], [-4.0, 5.0, -6.0]])


def test_elementwise_norms_against_numpy():
    assert frobenius_norm(A) == pytest.approx(np.linalg.norm(A, "fro"))
    assert one_norm(A) == pytest.approx(np.linalg.norm(A, 1))
    assert infinity_norm(A) == pytest.approx(np.linalg.norm(A, np.inf))
    assert max_norm(A) == 6.0


def test_singular_value_norms():
    Q1 = random_orthogonal(4, seed=1)
    Q2 = random_orthogonal(3, seed=2)
    s = np.array([6.0, 3.0, 1.0])
    B = (Q1[:, :3] * s) @ Q2.T
    assert spectral_norm(B) == pytest.approx(6.0, rel=1e-8)
    assert nuclear_norm(B) == pytest.approx(10.0, rel=1e-8)
    assert spectral_norm(B) == pytest.approx(np.linalg.norm(B, 2), rel=1e-8)
    assert nuclear_norm(B) == pytest.approx(np.linalg.norm(B, "nuc"), rel=1e-8)


def test_p_norm():
    assert p_norm(A, 2) == pytest.approx(frobenius_norm(A))
    assert p_norm(A, 1) == pytest.approx(np.abs(A).sum())
    assert p_norm(A, math.inf) == max_norm(A)
    assert p_norm([[3.0, 4.0]], 3) == pytest.approx((27 + 64) ** (1 / 3))


@pytest.mark.parametrize("p", [0.5, 0, -1, float("nan"), "2", True])
def test_p_norm_rejects_bad_p(p):
    with pytest.raises(InvalidValueError):
        p_norm(A, p)


def test_norms_of_zero_matrix():
    Z = np.zeros((2, 2))
    assert frobenius_norm(Z) == 0.0
    assert spectral_norm(Z) == 0.0
    assert nuclear_norm(Z) == 0.0
