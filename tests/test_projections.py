# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest

from densela.exceptions import InvalidValueError, LinearlyDependentColumnsError
from densela.projections import (
    complement_vector,
    gram_schmidt,
    normalize,
    orthonormalize,
    project,
)


def test_normalize():
    np.testing.assert_allclose(normalize([3, 4]), [0.6, 0.8])
    with pytest.raises(InvalidValueError):
        normalize([0, 0, 0])


def test_project_onto_line():
    p = project([2, 3], [1, 0])
    np.testing.assert_allclose(p, [2, 0])
    # residual is orthogonal to the line
    v = np.array([1.0, 2.0, 3.0])
    a = np.array([1.0, 1.0, 0.0])
    assert abs((v - project(v, a)) @ a) < 1e-12
    with pytest.raises(InvalidValueError):
        project(v, [0, 0, 0])
    with pytest.raises(InvalidValueError):
        project(v, [1, 0])


@pytest.mark.parametrize("m,n", [(3, 3), (6, 4), (20, 7)])
def test_gram_schmidt_orthonormal_columns(m, n):
    rng = np.random.default_rng(seed=m * n)
    A = rng.standard_normal((m, n))
    Q = gram_schmidt(A)
    np.testing.assert_allclose(Q.T @ Q, np.eye(n), atol=1e-10)
    # same column space, column by column (Q^T A is upper-triangular)
    np.testing.assert_allclose(np.tril(Q.T @ A, -1), 0.0, atol=1e-10)


def test_gram_schmidt_without_normalization():
    A = np.array([[1.0, 1.0], [0.0, 1.0]])
    Q = gram_schmidt(A, normalize=False)
    np.testing.assert_allclose(Q, [[1.0, 0.0], [0.0, 1.0]])


def test_gram_schmidt_dependent_column_names_index():
    A = np.array([[1.0, 2.0, 0.0], [1.0, 2.0, 1.0], [0.0, 0.0, 1.0]])
    with pytest.raises(LinearlyDependentColumnsError) as exc:
        gram_schmidt(A)
    assert exc.value.column == 1


def test_gram_schmidt_complete_fills_dependent_columns():
    A = np.zeros((3, 3))
    A[:, 0] = [1.0, 1.0, 0.0]
    Q = gram_schmidt(A, complete=True)
    np.testing.assert_allclose(Q.T @ Q, np.eye(3), atol=1e-12)
    np.testing.assert_allclose(Q[:, 0], np.array([1.0, 1.0, 0.0]) / np.sqrt(2))


def test_gram_schmidt_complete_requires_normalize():
    with pytest.raises(InvalidValueError):
        gram_schmidt(np.eye(2), normalize=False, complete=True)


def test_gram_schmidt_too_many_columns():
    with pytest.raises(LinearlyDependentColumnsError):
        gram_schmidt(np.ones((2, 3)), complete=True)


def test_complement_vector():
    basis = np.eye(3)[:, :2]
    np.testing.assert_allclose(complement_vector(basis), [0.0, 0.0, 1.0])
    assert complement_vector(np.eye(3)) is None


def test_orthonormalize_vectors():
    out = orthonormalize([[1, 1, 0], [1, 0, 1]])
    assert len(out) == 2
    assert abs(out[0] @ out[1]) < 1e-12
    for v in out:
        assert np.linalg.norm(v) == pytest.approx(1.0)
    with pytest.raises(InvalidValueError):
        orthonormalize([[1, 0], [1, 0, 0]])
    with pytest.raises(InvalidValueError):
        orthonormalize([])
