"""Camera state and a controller that orbits it around a target."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from railshot.mathutils import (
    Matrix,
    Vector3,
    identity,
    look_at_lh,
    perspective_fov_lh,
    rotation_roll_pitch_yaw,
)

_ORIGIN: Vector3 = (0.0, 0.0, 0.0)


@dataclass
class Camera:
    """View and projection matrices plus the camera's basis vectors."""

    view: Matrix = field(default_factory=identity)
    projection: Matrix = field(default_factory=identity)
    eye: Vector3 = _ORIGIN
    focus: Vector3 = _ORIGIN
    up: Vector3 = _ORIGIN
    front: Vector3 = _ORIGIN
    right: Vector3 = _ORIGIN

    def set_look_at(self, eye, focus, up) -> None:
        """Point the camera from ``eye`` at ``focus``."""
        view = look_at_lh(eye, focus, up)
        self.view = view
        self.right = (view[0][0], view[1][0], view[2][0])
        self.up = (view[0][1], view[1][1], view[2][1])
        self.front = (view[0][2], view[1][2], view[2][2])
        self.eye = tuple(float(c) for c in eye)  # type: ignore[assignment]
        self.focus = tuple(float(c) for c in focus)  # type: ignore[assignment]

    def set_perspective_fov(self, fov_y, aspect, near_z, far_z) -> None:
        """Set a perspective projection."""
        self.projection = perspective_fov_lh(fov_y, aspect, near_z, far_z)


@dataclass
class CameraController:
    """Keeps the camera at a fixed distance behind a target."""

    target: Vector3 = _ORIGIN
    angle: Vector3 = _ORIGIN
    roll_speed: float = math.radians(90)
    range: float = 10.0
    max_angle_x: float = math.radians(45)
    min_angle_x: float = math.radians(-45)

    def update(self, elapsed_time: float, camera: Camera) -> None:
        """Clamp the orbit angles and place ``camera`` behind the target."""
        ax, ay, az = self.angle
        ax = min(max(ax, self.min_angle_x), self.max_angle_x)
        if ay < -math.pi:
            ay += 2.0 * math.pi
        if ay > math.pi:
            ay -= 2.0 * math.pi
        self.angle = (ax, ay, az)

        front = rotation_roll_pitch_yaw(ax, ay, az)[2][:3]
        eye = tuple(t - f * self.range for t, f in zip(self.target, front))
        camera.set_look_at(eye, self.target, (0.0, 1.0, 0.0))