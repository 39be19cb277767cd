"""The player: rides the rail forward, aims with the mouse and shoots."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Optional

from railshot.camera import Camera
from railshot.character import Character
from railshot.collision import (
    intersect_cylinder_vs_cylinder,
    intersect_sphere_vs_cylinder,
)
from railshot.enemy import Enemy, EnemyManager
from railshot.mathutils import Vector3, normalize
from railshot.projectile import ProjectileManager, ProjectileStraight

GOAL_Z = -363.0
_CRUISE_STEP = 0.05
_BRAKE_STEP = 0.03
_EMPTY_STEP = 0.3
_BRAKE_PENALTY_PERIOD = 1.0
_COMBO_BONUS = 30
_AIM_SPREAD_X = 0.65
_AIM_SPREAD_Y = 0.35
_MUZZLE_RAISE = 0.01


@dataclass
class PlayerInput:
    """One frame of player input."""

    move_x: float = 0.0
    move_y: float = 0.0
    mouse_x: float = 0.0
    mouse_y: float = 0.0
    fire: bool = False
    brake: bool = False
    jump: bool = False
    recall: bool = False


@dataclass(eq=False)
class Player(Character):
    """The player character with its ammunition, score and combo."""

    move: float = 0.03
    camera: Camera = field(default_factory=Camera, repr=False)
    enemies: EnemyManager = field(default_factory=EnemyManager, repr=False)
    screen_width: float = 1980.0
    screen_height: float = 1080.0
    move_speed: float = 5.0
    turn_speed: float = math.radians(720)
    jump_speed: float = 12.0
    shot_count: int = 0
    max_shot_count: int = 20
    jump_count: int = 0
    jump_limit: int = 2
    mouse_x: float = 0.0
    mouse_y: float = 0.0
    score: int = 0
    combo: int = 0
    brake_time: float = 0.0
    projectile_manager: ProjectileManager = field(
        default_factory=ProjectileManager, repr=False
    )
    on_hit: Optional[Callable[[Enemy], None]] = field(default=None, repr=False)
    _inputs: PlayerInput = field(default_factory=PlayerInput, init=False, repr=False)

    def initialize(self) -> None:
        """Reset the player for a new run."""
        self.scale = (0.01, 0.01, 0.01)
        self.shot_count = 0
        self.position = (0.0, 0.0, 0.0)
        self.angle = (0.0, 0.0, 0.0)
        self.score = 0
        self.combo = 0

    def update(self, elapsed_time: float, inputs: PlayerInput) -> None:
        """Handle input, shots and hits, then advance along the rail."""
        self._inputs = inputs
        self.input_move(elapsed_time, inputs)
        self.update_transform()
        self.input_projectile(inputs)
        self.update_velocity(elapsed_time)
        self.projectile_manager.update(elapsed_time)
        self.collide_projectiles_with_enemies()

        px, py, pz = self.position
        if self.shot_count != self.max_shot_count:
            if inputs.brake:
                self.move = _BRAKE_STEP
                self.brake_time += elapsed_time
            else:
                self.move = _CRUISE_STEP
            if self.brake_time > _BRAKE_PENALTY_PERIOD:
                self.brake_time -= _BRAKE_PENALTY_PERIOD
                self.score -= 1
            if pz <= GOAL_Z:
                self.move = 0.0
                pz = GOAL_Z
        else:
            self.move = _EMPTY_STEP
        self.position = (px, py, pz - self.move)

    def get_move_vec(self, inputs: PlayerInput) -> Vector3:
        """Turn stick input into a horizontal direction relative to the camera."""
        ax, ay = inputs.move_x, inputs.move_y
        right_x, right_z = self.camera.right[0], self.camera.right[2]
        right_len = math.hypot(right_x, right_z)
        if right_len > 0.0:
            right_x /= right_len
            right_z /= right_len

        front_x, front_z = self.camera.front[0], self.camera.front[2]
        # The front vector is scaled by the length of the normalised right vector.
        front_len = math.hypot(right_x, right_z)
        if front_len > 0.0:
            front_x /= front_len
            front_z /= front_len

        return (right_x * ax + front_x * ax, 0.0, right_z * ay + front_z * ay)

    def input_move(self, elapsed_time: float, inputs: PlayerInput) -> None:
        """Apply stick input to speed and heading."""
        vx, _, vz = self.get_move_vec(inputs)
        # ``move`` is a data attribute here, so the base method is called directly.
        Character.move(self, elapsed_time, vx, vz, self.move_speed)
        self.turn(elapsed_time, vx, vz, self.turn_speed)

    def input_jump(self, inputs: PlayerInput) -> None:
        """Jump if asked and jumps remain."""
        if inputs.jump and self.jump_count < self.jump_limit:
            self.jump_count += 1
            self.jump(self.jump_speed)

    def input_projectile(self, inputs: PlayerInput) -> None:
        """Record the mouse and fire from the camera towards it if asked."""
        self.mouse_x = inputs.mouse_x
        self.mouse_y = inputs.mouse_y
        aim_x = (self.mouse_x * 2 / self.screen_width - 1) * _AIM_SPREAD_X
        aim_y = (self.mouse_y * 2 / self.screen_height - 1) * _AIM_SPREAD_Y
        eye = self.camera.eye
        front = self.camera.front

        if inputs.fire and self.shot_count < self.max_shot_count:
            direction = (
                math.sin(front[0]) + aim_x,
                math.sin(front[1]) - aim_y,
                math.sin(front[2]),
            )
            muzzle = (eye[0], eye[1] + _MUZZLE_RAISE, eye[2])
            projectile = ProjectileStraight(
                self.projectile_manager,
                slowdown=lambda: self.move,
                recalled=lambda: self._inputs.recall,
            )
            projectile.launch(direction, muzzle)
            self.shot_count += 1

    def collide_with_enemies(self) -> None:
        """Push enemies away, or bounce off when landing on one."""
        for enemy in self.enemies:
            pushed = intersect_cylinder_vs_cylinder(
                self.position,
                self.radius,
                self.height,
                enemy.position,
                enemy.radius,
                enemy.height,
            )
            if pushed is None:
                continue
            normal = normalize(tuple(p - e for p, e in zip(self.position, enemy.position)))
            if normal[1] > 0.8:
                self.jump(self.jump_speed * 0.5)
            else:
                enemy.position = pushed

    def collide_projectiles_with_enemies(self) -> None:
        """Damage enemies hit by projectiles and score the hits."""
        enemies = list(self.enemies)
        for projectile in list(self.projectile_manager):
            for enemy in enemies:
                hit = intersect_sphere_vs_cylinder(
                    projectile.position,
                    projectile.radius,
                    enemy.position,
                    enemy.radius * 2,
                    enemy.height,
                )
                if hit is None or not enemy.apply_damage(1, 0.5):
                    continue
                if self.on_hit is not None:
                    self.on_hit(enemy)
                self.score += enemy.score
                self.combo = self.combo + 1 if enemy.combo else 0
                if self.combo >= 2:
                    self.score += _COMBO_BONUS
                projectile.destroy()

    def on_landing(self) -> None:
        """Reset the jump count."""
        self.jump_count = 0