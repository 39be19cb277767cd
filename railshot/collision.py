"""Overlap tests that push the second shape out of the first."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from railshot.mathutils import Vector3, normalize


def _push_out_xz(
    origin: Sequence[float], target: Sequence[float], reach: float
) -> Optional[Vector3]:
    vx = target[0] - origin[0]
    vz = target[2] - origin[2]
    dist_xz = math.hypot(vx, vz)
    if dist_xz > reach:
        return None
    if dist_xz == 0.0:
        # No horizontal direction to push along.
        return (math.nan, float(target[1]), math.nan)
    vx /= dist_xz
    vz /= dist_xz
    return (vx * reach + origin[0], float(target[1]), vz * reach + origin[2])


def intersect_sphere_vs_sphere(
    position_a: Sequence[float],
    radius_a: float,
    position_b: Sequence[float],
    radius_b: float,
) -> Optional[Vector3]:
    """Return B's pushed-out position if the spheres overlap, else None."""
    vec = tuple(b - a for a, b in zip(position_a, position_b))
    reach = radius_a + radius_b
    if sum(c * c for c in vec) > reach * reach:
        return None
    direction = normalize(vec)
    return tuple(a + d * reach for a, d in zip(position_a, direction))  # type: ignore[return-value]


def intersect_cylinder_vs_cylinder(
    position_a: Sequence[float],
    radius_a: float,
    height_a: float,
    position_b: Sequence[float],
    radius_b: float,
    height_b: float,
) -> Optional[Vector3]:
    """Return B's pushed-out position if the upright cylinders overlap, else None."""
    if position_a[1] > position_b[1] + height_b:
        return None
    if position_a[1] + height_a < position_b[1]:
        return None
    return _push_out_xz(position_a, position_b, radius_a + radius_b)


def intersect_sphere_vs_cylinder(
    sphere_position: Sequence[float],
    sphere_radius: float,
    cylinder_position: Sequence[float],
    cylinder_radius: float,
    cylinder_height: float,
) -> Optional[Vector3]:
    """Return the cylinder's pushed-out position if it meets the sphere, else None."""
    if sphere_position[1] > cylinder_position[1] + cylinder_height:
        return None
    if sphere_position[1] + sphere_radius < cylinder_position[1]:
        return None
    return _push_out_xz(sphere_position, cylinder_position, sphere_radius + cylinder_radius)