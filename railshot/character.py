"""A movable, damageable character with simple ground physics."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from railshot.mathutils import (
    Matrix,
    Vector3,
    identity,
    mat_mul,
    rotation_roll_pitch_yaw,
    scaling,
    translation,
)

_INVINCIBLE_WINDOW = 0.5


@dataclass(eq=False)
class Character:
    """Position, orientation and velocity of something that walks the stage."""

    position: Vector3 = (0.0, 0.0, 0.0)
    angle: Vector3 = (0.0, 0.0, 0.0)
    scale: Vector3 = (1.0, 1.0, 1.0)
    transform: Matrix = field(default_factory=identity)
    radius: float = 0.5
    gravity: float = 0.0
    height: float = 2.0
    invincible_timer: float = 0.0
    friction: float = 15.0
    health: int = 1
    acceleration: float = 50.0
    max_move_speed: float = 5.0
    move_vec_x: float = 0.0
    move_vec_z: float = 0.0
    air_control: float = 0.3
    velocity: Vector3 = (0.0, 0.0, 0.0)
    is_ground: bool = False
    move: float = 0.03
    times_damaged: int = 0
    is_dead: bool = False

    def update_transform(self) -> None:
        """Rebuild the world matrix from scale, rotation and position."""
        s = scaling(*self.scale)
        r = rotation_roll_pitch_yaw(*self.angle)
        t = translation(*self.position)
        self.transform = mat_mul(mat_mul(s, r), t)

    def add_impulse(self, impulse) -> None:
        """Add ``impulse`` to the velocity."""
        self.velocity = tuple(v + i for v, i in zip(self.velocity, impulse))  # type: ignore[assignment]

    def apply_damage(self, damage: int, invincible_time: float) -> bool:
        """Take ``damage``; return True if health changed.

        A hit always starts an invincibility window of half a second.
        """
        if damage == 0:
            return False
        if self.health <= 0:
            return False
        if self.invincible_timer > 0:
            return False
        self.invincible_timer = _INVINCIBLE_WINDOW
        self.health -= damage
        if self.health <= 0:
            self.on_dead()
        else:
            self.on_damaged()
        return True

    def move(self, elapsed_time: float, vx: float, vz: float, speed: float) -> None:
        """Set the top horizontal speed."""
        self.max_move_speed = speed

    def turn(self, elapsed_time: float, vx: float, vz: float, speed: float) -> None:
        """Rotate about Y towards the direction (vx, vz)."""
        speed *= elapsed_time
        size = math.hypot(vx, vz)
        if size < 0.01:
            return
        vx /= size
        vz /= size
        ax, ay, az = self.angle
        front_x = math.sin(ay)
        front_z = math.cos(ay)
        rot = min(1.0 - (front_x * vx + front_z * vz), speed)
        side = front_z * vx - front_x * vz
        ay = ay - rot if side < 0.0 else ay + rot
        self.angle = (ax, ay, az)

    def jump(self, speed: float) -> None:
        """Set the upward velocity."""
        vx, _, vz = self.velocity
        self.velocity = (vx, speed, vz)

    def update_velocity(self, elapsed_time: float) -> None:
        """Apply horizontal friction and acceleration, then move horizontally."""
        self.update_horizontal_velocity(elapsed_time)
        self.update_horizontal_move(elapsed_time)

    def update_vertical_velocity(self, elapsed_time: float) -> None:
        """Apply gravity."""
        vx, vy, vz = self.velocity
        self.velocity = (vx, vy + self.gravity * elapsed_time, vz)

    def update_vertical_move(self, elapsed_time: float) -> None:
        """Move vertically and stop on the ground at y = 0."""
        px, py, pz = self.position
        vx, vy, vz = self.velocity
        py += vy * elapsed_time
        if py < 0.0:
            py = 0.0
            self.velocity = (vx, 0.0, vz)
            landed = not self.is_ground
            self.is_ground = True
            self.position = (px, py, pz)
            if landed:
                self.on_landing()
            return
        self.is_ground = False
        self.position = (px, py, pz)

    def update_horizontal_velocity(self, elapsed_time: float) -> None:
        """Slow down by friction, then speed up along the move vector."""
        vx, vy, vz = self.velocity
        speed = math.hypot(vx, vz)
        if speed > 0.0:
            friction = self.friction * elapsed_time
            if not self.is_ground:
                friction *= self.air_control
            if speed > friction:
                vx -= vx / speed * friction
                vz -= vz / speed * friction
            else:
                vx = vz = 0.0

        if speed <= self.max_move_speed:
            if math.hypot(self.move_vec_x, self.move_vec_z) > 0.0:
                accel = self.acceleration * elapsed_time
                if not self.is_ground:
                    accel *= self.air_control
                vx += self.move_vec_x * accel
                vz += self.move_vec_z * accel
                new_speed = math.hypot(vx, vz)
                if new_speed > self.max_move_speed:
                    vx = vx / new_speed * self.max_move_speed
                    vz = vz / new_speed * self.max_move_speed

        self.velocity = (vx, vy, vz)
        self.move_vec_x = 0.0
        self.move_vec_z = 0.0

    def update_horizontal_move(self, elapsed_time: float) -> None:
        """Advance the position in the XZ plane."""
        px, py, pz = self.position
        vx, _, vz = self.velocity
        self.position = (px + vx * elapsed_time, py, pz + vz * elapsed_time)

    def update_invincible_timer(self, elapsed_time: float) -> None:
        """Count down the invincibility window."""
        if self.invincible_timer > 0.0:
            self.invincible_timer -= elapsed_time

    def on_landing(self) -> None:
        """Called when the character touches the ground."""

    def on_damaged(self) -> None:
        """Called when the character takes damage and survives; counts the hit."""
        self.times_damaged += 1

    def on_dead(self) -> None:
        """Called when health drops to zero or below; marks the character dead."""
        self.is_dead = True