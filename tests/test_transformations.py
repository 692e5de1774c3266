# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import math

import numpy as np
import pytest

from densela.exceptions import DimensionMismatchError, InvalidValueError
from densela.transformations import (
    direction_3d,
    orthographic,
    perspective,
    rotation_2d,
    rotation_3d,
    rotation_3d_degrees,
    rotation_3d_pitch,
    rotation_3d_roll,
    rotation_3d_yaw,
    scale_2d,
    scale_3d,
    transform_2d,
    transform_3d,
    translation_2d,
    translation_3d,
    view,
)


def test_rotation_2d_quarter_turn():
    np.testing.assert_allclose(transform_2d([1, 0], rotation_2d(math.pi / 2)), [0, 1], atol=1e-15)


@pytest.mark.parametrize(
    "rot,axis,image",
    [
        (rotation_3d_roll, [0, 1, 0], [0, 0, 1]),
        (rotation_3d_pitch, [0, 0, 1], [1, 0, 0]),
        (rotation_3d_yaw, [1, 0, 0], [0, 1, 0]),
    ],
)
def test_axis_rotations_follow_right_hand_rule(rot, axis, image):
    np.testing.assert_allclose(transform_3d(axis, rot(math.pi / 2)), image, atol=1e-15)


def test_rotation_3d_composes_yaw_pitch_roll():
    roll, pitch, yaw = 0.3, -0.7, 1.1
    expected = rotation_3d_yaw(yaw) @ rotation_3d_pitch(pitch) @ rotation_3d_roll(roll)
    R = rotation_3d(roll, pitch, yaw)
    np.testing.assert_allclose(R, expected, atol=1e-14)
    # the linear part is orthogonal
    np.testing.assert_allclose(R[:3, :3] @ R[:3, :3].T, np.eye(3), atol=1e-14)


def test_rotation_3d_degrees():
    np.testing.assert_allclose(rotation_3d_degrees(30, 45, 60), rotation_3d(*np.radians([30, 45, 60])), atol=1e-15)


def test_scale_and_translation():
    np.testing.assert_allclose(transform_2d([1, 2], scale_2d(3)), [3, 6])
    np.testing.assert_allclose(transform_2d([1, 2], scale_2d(2, -1)), [2, -2])
    np.testing.assert_allclose(transform_2d([1, 2], translation_2d(5, -1)), [6, 1])
    np.testing.assert_allclose(transform_3d([1, 1, 1], scale_3d(2, 3, 4)), [2, 3, 4])
    np.testing.assert_allclose(transform_3d([1, 1, 1], scale_3d(2)), [2, 2, 2])
    np.testing.assert_allclose(transform_3d([0, 0, 0], translation_3d(1, 2, 3)), [1, 2, 3])
    np.testing.assert_allclose(transform_3d([0, 0, 0], translation_3d(7)), [7, 7, 7])
    with pytest.raises(InvalidValueError):
        scale_3d(1, 2)
    with pytest.raises(InvalidValueError):
        translation_3d(1, None, 3)


def test_translation_does_not_move_directions():
    T = translation_3d(1, 2, 3)
    np.testing.assert_allclose(direction_3d([0, 0, 1], T[:3, :3]), [0, 0, 1])


def test_transform_rejects_degenerate_w():
    M = np.eye(4)
    M[3, 3] = 0.0
    with pytest.raises(InvalidValueError):
        transform_3d([1, 2, 3], M)


def test_transform_shape_checks():
    with pytest.raises(DimensionMismatchError):
        transform_2d([1, 2, 3], np.eye(3))
    with pytest.raises(DimensionMismatchError):
        transform_3d([1, 2, 3], np.eye(3))


@pytest.mark.parametrize("angle", [float("nan"), float("inf"), "1"])
def test_rotation_rejects_non_finite_angle(angle):
    with pytest.raises(InvalidValueError):
        rotation_2d(angle)


def test_view_moves_eye_to_origin_and_looks_down_negative_z():
    eye = np.array([1.0, 2.0, 5.0])
    V = view(eye, [1.0, 2.0, 0.0], [0.0, 1.0, 0.0])
    np.testing.assert_allclose(transform_3d(eye, V), [0, 0, 0], atol=1e-14)
    np.testing.assert_allclose(transform_3d([1.0, 2.0, 0.0], V), [0, 0, -5], atol=1e-14)


def test_view_rejects_degenerate_basis():
    with pytest.raises(InvalidValueError):
        view([0, 0, 0], [0, 0, 0], [0, 1, 0])
    with pytest.raises(InvalidValueError):
        view([0, 0, 0], [0, 1, 0], [0, 1, 0])


def test_perspective_maps_near_and_far_planes():
    P = perspective(math.pi / 2, 1.0, 1.0, 10.0)
    np.testing.assert_allclose(transform_3d([0, 0, -1], P), [0, 0, -1], atol=1e-14)
    np.testing.assert_allclose(transform_3d([0, 0, -10], P), [0, 0, 1], atol=1e-14)
    with pytest.raises(InvalidValueError):
        perspective(math.pi / 2, 1.0, 1.0, 1.0)
    with pytest.raises(InvalidValueError):
        perspective(0.0, 1.0, 1.0, 10.0)


@pytest.mark.parametrize("near,far", [(-1.0, 10.0), (10.0, 1.0), (0.0, 5.0), (1.0, -5.0)])
def test_perspective_rejects_bad_planes(near, far):
    with pytest.raises(InvalidValueError):
        perspective(1.0, 1.0, near, far)


def test_orthographic_maps_box_to_unit_cube():
    P = orthographic(-2, 2, -1, 1, 1, 11)
    np.testing.assert_allclose(transform_3d([-2, -1, -1], P), [-1, -1, -1], atol=1e-15)
    np.testing.assert_allclose(transform_3d([2, 1, -11], P), [1, 1, 1], atol=1e-15)
    with pytest.raises(InvalidValueError):
        orthographic(0, 0, -1, 1, 1, 2)
