"""Vector and matrix helpers using row vectors and left-handed coordinates."""

from __future__ import annotations

import math
import random
from typing import Optional, Sequence

Vector3 = tuple[float, float, float]
Row = tuple[float, float, float, float]
Matrix = tuple[Row, Row, Row, Row]

_EPSILON = 0.00001


def random_range(low: float, high: float, rng: Optional[random.Random] = None) -> float:
    """Return a random value between ``low`` and ``high``."""
    source = rng if rng is not None else random
    value = source.random()
    return low + (high - low) * value


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    """Dot product of two 3D vectors."""
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Sequence[float], b: Sequence[float]) -> Vector3:
    """Cross product of two 3D vectors."""
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length(v: Sequence[float]) -> float:
    """Euclidean length of a 3D vector."""
    return math.sqrt(dot(v, v))


def normalize(v: Sequence[float]) -> Vector3:
    """Unit vector in the direction of ``v``; the zero vector stays zero."""
    size = length(v)
    if size == 0.0:
        return (0.0, 0.0, 0.0)
    return (v[0] / size, v[1] / size, v[2] / size)


def mat_mul(a: Matrix, b: Matrix) -> Matrix:
    """Product ``a @ b`` of two 4x4 matrices."""
    columns = list(zip(*b))
    return tuple(
        tuple(sum(x * y for x, y in zip(row, column)) for column in columns)
        for row in a
    )  # type: ignore[return-value]


def identity() -> Matrix:
    """The 4x4 identity matrix."""
    return (
        (1.0, 0.0, 0.0, 0.0),
        (0.0, 1.0, 0.0, 0.0),
        (0.0, 0.0, 1.0, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def scaling(x: float, y: float, z: float) -> Matrix:
    """Scaling matrix."""
    return (
        (x, 0.0, 0.0, 0.0),
        (0.0, y, 0.0, 0.0),
        (0.0, 0.0, z, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def translation(x: float, y: float, z: float) -> Matrix:
    """Translation matrix; the offset sits in the last row."""
    return (
        (1.0, 0.0, 0.0, 0.0),
        (0.0, 1.0, 0.0, 0.0),
        (0.0, 0.0, 1.0, 0.0),
        (x, y, z, 1.0),
    )


def rotation_roll_pitch_yaw(pitch: float, yaw: float, roll: float) -> Matrix:
    """Rotation applying roll (Z), then pitch (X), then yaw (Y)."""
    cp, sp = math.cos(pitch), math.sin(pitch)
    cy, sy = math.cos(yaw), math.sin(yaw)
    cr, sr = math.cos(roll), math.sin(roll)
    return (
        (cr * cy + sr * sp * sy, sr * cp, sr * sp * cy - cr * sy, 0.0),
        (cr * sp * sy - sr * cy, cr * cp, sr * sy + cr * sp * cy, 0.0),
        (cp * sy, -sp, cp * cy, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def rotation_axis(axis: Sequence[float], angle: float) -> Matrix:
    """Rotation by ``angle`` radians about ``axis``."""
    if length(axis) == 0.0:
        raise ValueError("rotation axis must not be the zero vector")
    x, y, z = normalize(axis)
    c, s = math.cos(angle), math.sin(angle)
    t = 1.0 - c
    return (
        (c + x * x * t, x * y * t + z * s, x * z * t - y * s, 0.0),
        (x * y * t - z * s, c + y * y * t, y * z * t + x * s, 0.0),
        (x * z * t + y * s, y * z * t - x * s, c + z * z * t, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def transform_normal(v: Sequence[float], m: Matrix) -> Vector3:
    """Transform a direction by the upper 3x3 part of ``m``."""
    return tuple(
        v[0] * m[0][j] + v[1] * m[1][j] + v[2] * m[2][j] for j in range(3)
    )  # type: ignore[return-value]


def look_at_lh(
    eye: Sequence[float], focus: Sequence[float], up: Sequence[float]
) -> Matrix:
    """Left-handed view matrix looking from ``eye`` towards ``focus``."""
    direction = (focus[0] - eye[0], focus[1] - eye[1], focus[2] - eye[2])
    if length(direction) == 0.0:
        raise ValueError("eye and focus must differ")
    if length(up) == 0.0:
        raise ValueError("up vector must not be the zero vector")
    r2 = normalize(direction)
    r0 = normalize(cross(up, r2))
    r1 = cross(r2, r0)
    return (
        (r0[0], r1[0], r2[0], 0.0),
        (r0[1], r1[1], r2[1], 0.0),
        (r0[2], r1[2], r2[2], 0.0),
        (-dot(r0, eye), -dot(r1, eye), -dot(r2, eye), 1.0),
    )


def perspective_fov_lh(fov_y: float, aspect: float, near_z: float, far_z: float) -> Matrix:
    """Left-handed perspective projection matrix."""
    if near_z <= 0.0 or far_z <= 0.0:
        raise ValueError("clip distances must be positive")
    if abs(fov_y) <= _EPSILON * 2.0:
        raise ValueError("field of view must not be zero")
    if abs(aspect) <= _EPSILON:
        raise ValueError("aspect ratio must not be zero")
    if abs(far_z - near_z) <= _EPSILON:
        raise ValueError("near and far clip distances must differ")
    height = math.cos(fov_y * 0.5) / math.sin(fov_y * 0.5)
    width = height / aspect
    depth = far_z / (far_z - near_z)
    return (
        (width, 0.0, 0.0, 0.0),
        (0.0, height, 0.0, 0.0),
        (0.0, 0.0, depth, 1.0),
        (0.0, 0.0, -depth * near_z, 0.0),
    )