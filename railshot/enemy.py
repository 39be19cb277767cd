"""Enemies, the manager that owns them, and the wandering slime."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional

from railshot.character import Character
from railshot.collision import intersect_cylinder_vs_cylinder
from railshot.mathutils import Vector3, random_range
from railshot.projectile import ProjectileManager, ProjectileStraight

_IDLE_TIME_RANGE = (3.0, 5.0)
_FIRE_INTERVAL = 2.0


@dataclass(eq=False)
class Enemy(Character):
    """A character owned by an :class:`EnemyManager`."""

    move: float = 0.03
    score: int = 0
    combo: bool = False
    manager: Optional[EnemyManager] = field(default=None, repr=False)

    def update(self, elapsed_time: float) -> None:
        """Advance physics, the invincibility window and the world matrix."""
        self.update_velocity(elapsed_time)
        self.update_invincible_timer(elapsed_time)
        self.update_transform()

    def destroy(self) -> None:
        """Ask the manager to drop this enemy after its next update."""
        if self.manager is not None:
            self.manager.remove(self)


class EnemyManager:
    """Owns enemies, drops destroyed ones and keeps them from overlapping."""

    def __init__(self) -> None:
        self._enemies: list[Enemy] = []
        self._removes: set[Enemy] = set()

    def register(self, enemy: Enemy) -> None:
        """Add an enemy and make this manager its owner."""
        enemy.manager = self
        self._enemies.append(enemy)

    def remove(self, enemy: Enemy) -> None:
        """Mark an enemy for removal at the end of the next update."""
        self._removes.add(enemy)

    def clear(self) -> None:
        """Drop every enemy."""
        self._enemies.clear()

    def update(self, elapsed_time: float) -> None:
        """Update every enemy, drop those marked for removal, then separate them."""
        for enemy in list(self._enemies):
            enemy.update(elapsed_time)
        if self._removes:
            self._enemies = [e for e in self._enemies if e not in self._removes]
        self._removes.clear()
        self.collide_enemies()

    def collide_enemies(self) -> None:
        """Push each later enemy out of every earlier one it overlaps."""
        for i, first in enumerate(self._enemies):
            for second in self._enemies[i + 1:]:
                pushed = intersect_cylinder_vs_cylinder(
                    first.position,
                    first.radius,
                    first.height,
                    second.position,
                    second.radius,
                    second.height,
                )
                if pushed is not None:
                    second.position = pushed

    def __len__(self) -> int:
        return len(self._enemies)

    def __getitem__(self, index: int) -> Enemy:
        return self._enemies[index]

    def __iter__(self) -> Iterator[Enemy]:
        return iter(list(self._enemies))


class SlimeState(Enum):
    """What a slime is doing."""

    WANDER = "wander"
    IDLE = "idle"
    ATTACK = "attack"


@dataclass(eq=False)
class EnemySlime(Enemy):
    """An enemy that roams its territory and shoots at a nearby player.

    ``player`` is any object with a ``position`` and a ``move`` step.
    """

    scale: Vector3 = (0.01, 0.01, 0.01)
    height: float = 1.0
    state: SlimeState = SlimeState.WANDER
    target_position: Vector3 = (0.0, 0.0, 0.0)
    territory_origin: Vector3 = (0.0, 0.0, 0.0)
    territory_range: float = 10.0
    move_speed: float = 2.0
    turn_speed: float = math.radians(360)
    state_timer: float = 0.0
    search_range: float = 5.0
    player: Any = field(default=None, repr=False)
    rng: Optional[random.Random] = field(default=None, repr=False)
    projectile_manager: ProjectileManager = field(
        default_factory=ProjectileManager, repr=False
    )

    def __post_init__(self) -> None:
        self.set_wander_state()

    def update(self, elapsed_time: float) -> None:
        """Run the current state, then physics, projectiles and matrices."""
        handlers = {
            SlimeState.WANDER: self._update_wander_state,
            SlimeState.IDLE: self._update_idle_state,
            SlimeState.ATTACK: self._update_attack_state,
        }
        handlers[self.state](elapsed_time)
        self.update_velocity(elapsed_time)
        self.projectile_manager.update(elapsed_time)
        self.update_invincible_timer(elapsed_time)
        self.update_transform()

    def set_territory(self, origin, territory_range: float) -> None:
        """Set the centre and radius of the area the slime roams."""
        self.territory_origin = tuple(float(c) for c in origin)  # type: ignore[assignment]
        self.territory_range = territory_range

    def set_random_target_position(self) -> None:
        """Pick a random point inside the territory."""
        theta = random_range(-math.pi, math.pi, self.rng)
        reach = random_range(0.0, self.territory_range, self.rng)
        ox, oy, oz = self.territory_origin
        self.target_position = (ox + math.sin(theta) * reach, oy, oz + math.cos(theta) * reach)

    def move_to_target(
        self, elapsed_time: float, move_speed_rate: float, turn_speed_rate: float
    ) -> None:
        """Head and turn towards the target position."""
        vx = self.target_position[0] - self.position[0]
        vz = self.target_position[2] - self.position[2]
        dist = math.hypot(vx, vz)
        if dist > 0.0:
            vx /= dist
            vz /= dist
        # ``move`` is a data attribute here, so the base method is called directly.
        Character.move(self, elapsed_time, vx, vz, self.move_speed * move_speed_rate)
        self.turn(elapsed_time, vx, vz, self.turn_speed * turn_speed_rate)

    def search_player(self) -> bool:
        """Return True if the player is within range and in front."""
        if self.player is None:
            return False
        px, py, pz = self.player.position
        vx = px - self.position[0]
        vy = py - self.position[1]
        vz = pz - self.position[2]
        if math.sqrt(vx * vx + vy * vy + vz * vz) >= self.search_range:
            return False
        dist_xz = math.hypot(vx, vz)
        if dist_xz == 0.0:
            return False
        vx /= dist_xz
        vz /= dist_xz
        yaw = self.angle[1]
        return math.sin(yaw) * vx + math.cos(yaw) * vz > 0.0

    def set_wander_state(self) -> None:
        """Start wandering towards a fresh random target."""
        self.state = SlimeState.WANDER
        self.set_random_target_position()

    def set_idle_state(self) -> None:
        """Wait for a random three to five seconds."""
        self.state = SlimeState.IDLE
        self.state_timer = random_range(*_IDLE_TIME_RANGE, self.rng)

    def set_attack_state(self) -> None:
        """Chase and shoot at the player, firing at once."""
        self.state = SlimeState.ATTACK
        self.state_timer = 0.0

    def on_dead(self) -> None:
        """Remove the slime when it dies."""
        self.destroy()

    def _update_wander_state(self, elapsed_time: float) -> None:
        vx = self.target_position[0] - self.position[0]
        vz = self.target_position[2] - self.position[2]
        if vx * vx + vz * vz < self.radius * self.radius:
            self.set_idle_state()
        self.move_to_target(elapsed_time, 1.0, 1.0)
        if self.search_player():
            self.set_attack_state()

    def _update_idle_state(self, elapsed_time: float) -> None:
        self.state_timer -= elapsed_time
        if self.state_timer < 0.0:
            self.set_wander_state()
        if self.search_player():
            self.set_attack_state()

    def _update_attack_state(self, elapsed_time: float) -> None:
        if self.player is not None:
            self.target_position = tuple(float(c) for c in self.player.position)  # type: ignore[assignment]
        self.move_to_target(elapsed_time, 0.0, 1.0)

        self.state_timer -= elapsed_time
        if self.state_timer < 0.0:
            yaw = self.angle[1]
            direction = (math.sin(yaw), 0.0, math.cos(yaw))
            px, py, pz = self.position
            muzzle = (px, py + self.height * 0.5, pz)
            player = self.player
            projectile = ProjectileStraight(
                self.projectile_manager,
                slowdown=(lambda: player.move) if player is not None else None,
            )
            projectile.launch(direction, muzzle)
            self.state_timer = _FIRE_INTERVAL

        if not self.search_player():
            self.set_idle_state()