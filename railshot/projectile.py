"""Projectiles and the manager that owns them."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Callable, Iterator, Optional

from railshot.mathutils import (
    Matrix,
    Vector3,
    cross,
    dot,
    identity,
    length,
    normalize,
    rotation_axis,
    transform_normal,
)

_PROVISIONAL_UP: Vector3 = (0.001, 1.0, 0.0)
_LIFE_STEP = 0.01


class Projectile(ABC):
    """A projectile that registers itself with its manager on creation."""

    def __init__(self, manager: "ProjectileManager") -> None:
        self.manager = manager
        self.position: Vector3 = (0.0, 0.0, 0.0)
        self.direction: Vector3 = (0.0, 0.0, 1.0)
        self.scale: Vector3 = (1.0, 1.0, 1.0)
        self.transform: Matrix = identity()
        self.radius = 0.5
        manager.register(self)

    @abstractmethod
    def update(self, elapsed_time: float) -> None:
        """Advance the projectile by ``elapsed_time`` seconds."""

    def update_transform(self) -> None:
        """Rebuild the world matrix from the direction and normalise the direction."""
        front = normalize(self.direction)
        up = normalize(_PROVISIONAL_UP)
        right = normalize(cross(front, up))
        up = tuple(f - r for f, r in zip(front, right))
        sx, sy, sz = self.scale
        self.transform = (
            (right[0] * sx, right[1] * sy, right[2] * sz, 0.0),
            (up[0] * sx, up[1] * sy, up[2] * sz, 0.0),
            (front[0] * sx, front[1] * sy, front[2] * sz, 0.0),
            (*self.position, 1.0),
        )  # type: ignore[assignment]
        self.direction = front

    def destroy(self) -> None:
        """Ask the manager to drop this projectile after its next update."""
        self.manager.remove(self)

    def _advance(self, distance: float) -> None:
        self.position = tuple(
            p + d * distance for p, d in zip(self.position, self.direction)
        )  # type: ignore[assignment]


class ProjectileStraight(Projectile):
    """A projectile flying in a straight line."""

    def __init__(
        self,
        manager: "ProjectileManager",
        *,
        speed: float = 10.0,
        life_time: float = 3.0,
        slowdown: Optional[Callable[[], float]] = None,
        recalled: Optional[Callable[[], bool]] = None,
    ) -> None:
        super().__init__(manager)
        self.scale = (3.0, 3.0, 3.0)
        self.speed = speed
        self.life_timer = life_time
        self.slowdown = slowdown if slowdown is not None else (lambda: 0.0)
        self.recalled = recalled if recalled is not None else (lambda: False)

    def update(self, elapsed_time: float) -> None:
        """Expire, move forward (reduced by the slowdown fraction) and rebuild the matrix."""
        self.life_timer -= _LIFE_STEP
        if self.life_timer < 0.0 or self.recalled() or self.position[1] < 0.2:
            self.destroy()
        speed = self.speed * elapsed_time
        speed -= speed * self.slowdown()
        self._advance(speed)
        self.update_transform()

    def launch(self, direction, position) -> None:
        """Set the flight direction and starting position."""
        self.direction = tuple(float(c) for c in direction)  # type: ignore[assignment]
        self.position = tuple(float(c) for c in position)  # type: ignore[assignment]


class ProjectileHoming(Projectile):
    """A projectile that steers towards a target point."""

    def __init__(
        self,
        manager: "ProjectileManager",
        *,
        move_speed: float = 10.0,
        turn_speed: float = math.radians(180),
        life_time: float = 3.0,
    ) -> None:
        super().__init__(manager)
        self.scale = (3.0, 3.0, 3.0)
        self.move_speed = move_speed
        self.turn_speed = turn_speed
        self.life_timer = life_time
        self.target: Vector3 = (0.0, 0.0, 0.0)

    def update(self, elapsed_time: float) -> None:
        """Expire, move forward, turn towards the target and rebuild the matrix."""
        self.life_timer -= _LIFE_STEP
        if self.life_timer < 0.0:
            self.destroy()

        self._advance(self.move_speed * elapsed_time)

        turn_speed = self.turn_speed * elapsed_time
        to_target = tuple(t - p for t, p in zip(self.target, self.position))
        if dot(to_target, to_target) > 0.00001:
            to_target = normalize(to_target)
            rot = min(1.0 - dot(self.direction, to_target), turn_speed)
            if abs(rot) > 0.0001:
                axis = cross(self.direction, to_target)
                if length(axis) > 0.0:
                    rotation = rotation_axis(normalize(axis), rot)
                    self.direction = transform_normal(self.direction, rotation)

        self.update_transform()

    def launch(self, direction, position, target) -> None:
        """Set direction, starting position and target, then rebuild the matrix."""
        self.direction = tuple(float(c) for c in direction)  # type: ignore[assignment]
        self.position = tuple(float(c) for c in position)  # type: ignore[assignment]
        self.target = tuple(float(c) for c in target)  # type: ignore[assignment]
        self.update_transform()


class ProjectileManager:
    """Owns projectiles and drops destroyed ones after each update."""

    def __init__(self) -> None:
        self._projectiles: list[Projectile] = []
        self._removes: set[Projectile] = set()

    def register(self, projectile: Projectile) -> None:
        """Add a projectile."""
        self._projectiles.append(projectile)

    def remove(self, projectile: Projectile) -> None:
        """Mark a projectile for removal at the end of the next update."""
        self._removes.add(projectile)

    def update(self, elapsed_time: float) -> None:
        """Update every projectile, then drop those marked for removal."""
        for projectile in list(self._projectiles):
            projectile.update(elapsed_time)
        if self._removes:
            self._projectiles = [p for p in self._projectiles if p not in self._removes]
        self._removes.clear()

    def clear(self) -> None:
        """Drop every projectile."""
        self._projectiles.clear()

    def __len__(self) -> int:
        return len(self._projectiles)

    def __getitem__(self, index: int) -> Projectile:
        return self._projectiles[index]

    def __iter__(self) -> Iterator[Projectile]:
        return iter(list(self._projectiles))