# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest

from densela.core import (
    clone,
    combine,
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
    pad,
    size,
    size_square,
    submatrix,
    to_string,
    trace,
    transpose,
)
from densela.exceptions import (
    DimensionMismatchError,
    InvalidValueError,
    NotSquareError,
)


def test_create_and_identity():
    Z = create(2, 3)
    assert Z.shape == (2, 3)
    assert not Z.any()
    assert create(3).shape == (3, 3)
    np.testing.assert_array_equal(identity(3), np.eye(3))


@pytest.mark.parametrize("bad", [0, -1, 2.5, True])
def test_create_rejects_bad_sizes(bad):
    with pytest.raises(InvalidValueError):
        create(bad)
    with pytest.raises(InvalidValueError):
        identity(bad)


def test_size_queries():
    A = [[1, 2, 3], [4, 5, 6]]
    assert size(A) == (2, 3)
    assert not is_square(A)
    assert size_square(np.eye(4)) == 4
    with pytest.raises(NotSquareError):
        size_square(A)


@pytest.mark.parametrize(
    "candidate",
    [
        [],
        [[]],
        [[1, 2], [3]],
        [[1, float("nan")]],
        [[float("inf")]],
        [["a", "b"]],
        [1, 2, 3],
        None,
    ],
)
def test_is_valid_rejects_malformed(candidate):
    assert not is_valid(candidate)


def test_is_valid_accepts_numeric():
    assert is_valid([[1, 2], [3, 4]])
    assert is_valid(np.arange(6).reshape(2, 3))


def test_non_finite_error_names_position():
    with pytest.raises(InvalidValueError) as exc:
        trace([[1.0, 2.0], [3.0, float("nan")]])
    assert exc.value.row == 1
    assert exc.value.column == 1


def test_predicates():
    assert is_zero(np.zeros((2, 3)))
    assert not is_zero([[0, 1e-3]])
    assert is_identity(np.eye(3))
    assert not is_identity(np.ones((2, 3)))
    assert is_symmetric([[1, 2], [2, 5]])
    assert not is_symmetric([[1, 2], [3, 5]])
    assert is_diagonal(np.diag([1.0, 2.0, 3.0]))
    assert not is_diagonal([[1, 0], [1e-3, 1]])
    # thresholds are caller-controlled
    assert is_symmetric([[1, 2], [2 + 1e-9, 5]], threshold=1e-8)


def test_clone_does_not_alias():
    A = np.array([[1.0, 2.0], [3.0, 4.0]])
    B = clone(A)
    B[0, 0] = 99.0
    assert A[0, 0] == 1.0


def test_equals():
    A = [[1.0, 2.0], [3.0, 4.0]]
    assert equals(A, [[1.0, 2.0], [3.0, 4.0 + 1e-10]])
    assert not equals(A, [[1.0, 2.0], [3.0, 4.1]])
    assert not equals(A, [[1.0, 2.0, 0.0], [3.0, 4.0, 0.0]])
    assert equals(A, [[1.0, 2.0], [3.0, 4.1]], tolerance=0.2)
    with pytest.raises(InvalidValueError):
        equals(A, A, tolerance=-1)


def test_to_string():
    assert to_string([[1, 2], [3, 4]], 0) == "[ 1, 2 ]\n[ 3, 4 ]"
    assert to_string([[1.5]]) == "[ 1.50 ]"
    with pytest.raises(InvalidValueError):
        to_string([[1]], -1)


def test_trace_and_transpose():
    A = np.arange(1, 7, dtype=float).reshape(2, 3)
    assert trace([[1, 2], [3, 4]]) == 5.0
    np.testing.assert_array_equal(transpose(A), A.T)
    # involution
    np.testing.assert_array_equal(transpose(transpose(A)), A)


def test_map_elements_passes_position():
    out = map_elements(np.zeros((2, 2)), lambda v, i, j: 10 * i + j)
    np.testing.assert_array_equal(out, [[0, 1], [10, 11]])


def test_map_elements_rejects_non_finite_result():
    with pytest.raises(InvalidValueError):
        map_elements([[1.0]], lambda v, i, j: float("inf"))


def test_block_helpers_round_trip():
    rng = np.random.default_rng(0)
    A = rng.standard_normal((4, 4))
    quads = [submatrix(A, r, c, 2, 2) for r, c in ((0, 0), (0, 2), (2, 0), (2, 2))]
    np.testing.assert_array_equal(combine(*quads), A)


def test_submatrix_bounds():
    A = np.ones((3, 3))
    with pytest.raises(DimensionMismatchError):
        submatrix(A, 2, 2, 2, 2)
    with pytest.raises(InvalidValueError):
        submatrix(A, 3, 0, 1, 1)


def test_pad_and_truncate():
    A = [[1, 2], [3, 4]]
    np.testing.assert_array_equal(pad(A, 3, 3), [[1, 2, 0], [3, 4, 0], [0, 0, 0]])
    np.testing.assert_array_equal(pad(A, 1, 2), [[1, 2]])


def test_combine_rejects_mismatched_quadrants():
    with pytest.raises(DimensionMismatchError):
        combine(np.eye(2), np.eye(2), np.eye(2), np.eye(3))
