# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Homogeneous-coordinate transforms.

2D transforms are 3×3, 3D transforms 4×4, both acting on column vectors
(``M @ [x, y, 1]``). Angles are radians unless the name says otherwise.
"""

import math
from typing import Optional

import numpy as np

from .arithmetic import matrix_multiply
from .exceptions import DimensionMismatchError, InvalidValueError
from .projections import normalize
from .validation import as_matrix, as_vector, assert_finite_scalar

# smallest |w| we are willing to divide by
W_TOL = 1e-10


def rotation_2d(radians: float) -> np.ndarray:
    """Counter-clockwise rotation about the origin."""
    radians = assert_finite_scalar(radians, "radians")
    c, s = math.cos(radians), math.sin(radians)
    return np.array(
        [
            [c, -s, 0.0],
            [s, c, 0.0],
            [0.0, 0.0, 1.0],
        ]
    )


def rotation_3d_roll(radians: float) -> np.ndarray:
    """Rotation about the x-axis."""
    radians = assert_finite_scalar(radians, "radians")
    c, s = math.cos(radians), math.sin(radians)
    return np.array(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_3d_pitch(radians: float) -> np.ndarray:
    """Rotation about the y-axis."""
    radians = assert_finite_scalar(radians, "radians")
    c, s = math.cos(radians), math.sin(radians)
    return np.array(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_3d_yaw(radians: float) -> np.ndarray:
    """Rotation about the z-axis."""
    radians = assert_finite_scalar(radians, "radians")
    c, s = math.cos(radians), math.sin(radians)
    return np.array(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_3d(roll: float, pitch: float, yaw: float) -> np.ndarray:
    """Yaw · Pitch · Roll: roll is applied first, yaw last."""
    pitch_roll = matrix_multiply(rotation_3d_pitch(pitch), rotation_3d_roll(roll))
    return matrix_multiply(rotation_3d_yaw(yaw), pitch_roll)


def rotation_3d_degrees(roll: float, pitch: float, yaw: float) -> np.ndarray:
    return rotation_3d(
        math.radians(assert_finite_scalar(roll, "roll")),
        math.radians(assert_finite_scalar(pitch, "pitch")),
        math.radians(assert_finite_scalar(yaw, "yaw")),
    )


def scale_2d(x: float, y: Optional[float] = None) -> np.ndarray:
    """Scale by (x, y); uniform when ``y`` is omitted."""
    x = assert_finite_scalar(x, "x")
    y = x if y is None else assert_finite_scalar(y, "y")
    return np.diag([x, y, 1.0])


def scale_3d(x: float, y: Optional[float] = None, z: Optional[float] = None) -> np.ndarray:
    """Scale by (x, y, z); uniform when only ``x`` is given."""
    x = assert_finite_scalar(x, "x")
    if y is None and z is None:
        y = z = x
    elif y is None or z is None:
        raise InvalidValueError("scale_3d takes either one factor or all three")
    return np.diag([x, assert_finite_scalar(y, "y"), assert_finite_scalar(z, "z"), 1.0])


def translation_2d(x: float, y: float) -> np.ndarray:
    T = np.eye(3)
    T[0, 2] = assert_finite_scalar(x, "x")
    T[1, 2] = assert_finite_scalar(y, "y")
    return T


def translation_3d(x: float, y: Optional[float] = None, z: Optional[float] = None) -> np.ndarray:
    """Translate by (x, y, z); the same distance on every axis when only ``x`` is given."""
    x = assert_finite_scalar(x, "x")
    if y is None and z is None:
        y = z = x
    elif y is None or z is None:
        raise InvalidValueError("translation_3d takes either one distance or all three")
    T = np.eye(4)
    T[:3, 3] = [x, assert_finite_scalar(y, "y"), assert_finite_scalar(z, "z")]
    return T


def _check_transform(M, n: int, name: str) -> np.ndarray:
    M = as_matrix(M, name)
    if M.shape != (n, n):
        raise DimensionMismatchError(
            f"{name} must be {n}×{n}, got {M.shape[0]}×{M.shape[1]}",
            shape_a=M.shape,
            shape_b=(n, n),
        )
    return M


def _check_point(v, n: int, name: str) -> np.ndarray:
    v = as_vector(v, name)
    if v.shape[0] != n:
        raise DimensionMismatchError(
            f"{name} must have {n} components, got {v.shape[0]}", shape_a=v.shape, shape_b=(n,)
        )
    return v


def _homogeneous_apply(point: np.ndarray, M: np.ndarray) -> np.ndarray:
    h = M @ np.append(point, 1.0)
    w = h[-1]
    if abs(w) < W_TOL:
        raise InvalidValueError(f"Degenerate transform: homogeneous w = {w:.3e}")
    return h[:-1] / w


def transform_2d(point, M) -> np.ndarray:
    """Apply a 3×3 homogeneous transform to a 2D point."""
    return _homogeneous_apply(_check_point(point, 2, "point"), _check_transform(M, 3, "M"))


def transform_3d(point, M) -> np.ndarray:
    """Apply a 4×4 homogeneous transform to a 3D point, dividing through by w."""
    return _homogeneous_apply(_check_point(point, 3, "point"), _check_transform(M, 4, "M"))


def direction_3d(direction, M) -> np.ndarray:
    """Apply a 3×3 linear map to a direction (no translation, no w)."""
    return _check_transform(M, 3, "M") @ _check_point(direction, 3, "direction")


def view(eye, target, up) -> np.ndarray:
    """
    Look-at matrix for a right-handed camera at ``eye`` looking toward
    ``target``; view space looks down -z.

    Raises
    ------
    InvalidValueError : eye == target, or ``up`` parallel to the view direction
    """
    eye = _check_point(eye, 3, "eye")
    target = _check_point(target, 3, "target")
    up = _check_point(up, 3, "up")

    forward = normalize(target - eye)
    right = normalize(np.cross(forward, normalize(up)))
    true_up = np.cross(right, forward)

    rotation = np.eye(4)
    rotation[0, :3] = right
    rotation[1, :3] = true_up
    rotation[2, :3] = -forward
    return matrix_multiply(rotation, translation_3d(-eye[0], -eye[1], -eye[2]))


def perspective(fov_y: float, aspect: float, near: float, far: float) -> np.ndarray:
    """OpenGL-style perspective projection, depth mapped to [-1, 1]."""
    fov_y = assert_finite_scalar(fov_y, "fov_y")
    aspect = assert_finite_scalar(aspect, "aspect")
    near = assert_finite_scalar(near, "near")
    far = assert_finite_scalar(far, "far")
    if not 0.0 < fov_y < math.pi:
        raise InvalidValueError(f"fov_y must be in (0, π), got {fov_y}")
    if aspect <= 0.0:
        raise InvalidValueError(f"aspect must be positive, got {aspect}")
    if near <= 0.0 or far <= 0.0:
        raise InvalidValueError(f"near and far planes must be positive, got near={near}, far={far}")
    if near >= far:
        raise InvalidValueError(f"near plane must be closer than far, got near={near}, far={far}")

    f = 1.0 / math.tan(fov_y / 2.0)
    P = np.zeros((4, 4))
    P[0, 0] = f / aspect
    P[1, 1] = f
    P[2, 2] = -(far + near) / (far - near)
    P[2, 3] = -(2.0 * far * near) / (far - near)
    P[3, 2] = -1.0
    return P


def orthographic(
    left: float, right: float, bottom: float, top: float, near: float, far: float
) -> np.ndarray:
    """Map the box [left, right]×[bottom, top]×[-near, -far] onto [-1, 1]³."""
    left, right, bottom, top, near, far = (
        assert_finite_scalar(v, name)
        for v, name in (
            (left, "left"),
            (right, "right"),
            (bottom, "bottom"),
            (top, "top"),
            (near, "near"),
            (far, "far"),
        )
    )
    if left == right or bottom == top or near == far:
        raise InvalidValueError("orthographic volume has zero extent")

    P = np.eye(4)
    P[0, 0] = 2.0 / (right - left)
    P[1, 1] = 2.0 / (top - bottom)
    P[2, 2] = -2.0 / (far - near)
    P[0, 3] = -(right + left) / (right - left)
    P[1, 3] = -(top + bottom) / (top - bottom)
    P[2, 3] = -(far + near) / (far - near)
    return P
