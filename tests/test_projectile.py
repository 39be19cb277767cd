import math

import pytest

from railshot.mathutils import dot, length, normalize
from railshot.projectile import (
    Projectile,
    ProjectileHoming,
    ProjectileManager,
    ProjectileStraight,
)


class Dummy(Projectile):
    def __init__(self, manager):
        super().__init__(manager)
        self.updates = 0

    def update(self, elapsed_time):
        self.updates += 1


def test_projectile_is_abstract():
    with pytest.raises(TypeError):
        Projectile(ProjectileManager())


def test_construction_registers_with_manager():
    manager = ProjectileManager()
    a = Dummy(manager)
    b = Dummy(manager)
    assert len(manager) == 2
    assert manager[0] is a
    assert list(manager) == [a, b]


def test_manager_updates_every_projectile():
    manager = ProjectileManager()
    items = [Dummy(manager) for _ in range(3)]
    manager.update(0.1)
    assert [p.updates for p in items] == [1, 1, 1]


def test_destroy_removes_after_update():
    manager = ProjectileManager()
    a = Dummy(manager)
    b = Dummy(manager)
    a.destroy()
    a.destroy()
    assert len(manager) == 2
    manager.update(0.1)
    assert list(manager) == [b]


def test_clear_empties_manager():
    manager = ProjectileManager()
    Dummy(manager)
    Dummy(manager)
    manager.clear()
    assert len(manager) == 0


def test_index_out_of_range_raises():
    manager = ProjectileManager()
    only = Dummy(manager)
    assert manager[0] is only
    with pytest.raises(IndexError):
        manager[1]
    assert len(manager) == 1


def test_update_transform_normalises_direction_and_sets_position():
    manager = ProjectileManager()
    p = Dummy(manager)
    p.position = (1.0, 2.0, 3.0)
    p.direction = (0.0, 0.0, 5.0)
    p.update_transform()
    assert length(p.direction) == pytest.approx(1.0)
    assert p.transform[3] == pytest.approx((1.0, 2.0, 3.0, 1.0))
    assert p.transform[2][:3] == pytest.approx(p.direction)


def test_straight_defaults_scale():
    p = ProjectileStraight(ProjectileManager())
    assert p.scale == (3.0, 3.0, 3.0)


def test_straight_moves_along_direction():
    manager = ProjectileManager()
    p = ProjectileStraight(manager, speed=10.0)
    p.launch((0.0, 0.0, 1.0), (0.0, 1.0, 0.0))
    manager.update(0.5)
    assert p.position[0] == pytest.approx(0.0)
    assert p.position[1] == pytest.approx(1.0)
    assert p.position[2] == pytest.approx(10.0 * 0.5)
    assert len(manager) == 1


def test_straight_full_slowdown_stops_motion():
    manager = ProjectileManager()
    p = ProjectileStraight(manager, slowdown=lambda: 1.0)
    p.launch((1.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    manager.update(1.0)
    assert p.position == pytest.approx((0.0, 1.0, 0.0))


def test_straight_recall_destroys():
    manager = ProjectileManager()
    p = ProjectileStraight(manager, recalled=lambda: True)
    p.launch((0.0, 0.0, 1.0), (0.0, 1.0, 0.0))
    manager.update(0.1)
    assert len(manager) == 0


def test_straight_below_floor_destroys():
    manager = ProjectileManager()
    p = ProjectileStraight(manager)
    p.launch((0.0, 0.0, 1.0), (0.0, 0.1, 0.0))
    manager.update(0.1)
    assert len(manager) == 0


def test_homing_turns_towards_target():
    manager = ProjectileManager()
    p = ProjectileHoming(manager)
    p.launch((0.0, 0.0, 1.0), (0.0, 0.0, 0.0), (10.0, 0.0, 10.0))
    before = dot(p.direction, normalize((10.0, 0.0, 10.0)))
    manager.update(0.1)
    to_target = normalize(tuple(t - q for t, q in zip(p.target, p.position)))
    after = dot(p.direction, to_target)
    assert after > before
    assert length(p.direction) == pytest.approx(1.0)
    assert p.direction[0] > 0.0


def test_homing_advances_position():
    manager = ProjectileManager()
    p = ProjectileHoming(manager, move_speed=4.0)
    p.launch((0.0, 0.0, 1.0), (0.0, 0.0, 0.0), (0.0, 0.0, 100.0))
    manager.update(0.5)
    assert p.position == pytest.approx((0.0, 0.0, 4.0 * 0.5))
    assert p.direction == pytest.approx((0.0, 0.0, 1.0))


def test_homing_target_behind_keeps_finite_direction():
    manager = ProjectileManager()
    p = ProjectileHoming(manager, move_speed=0.0)
    p.launch((0.0, 0.0, 1.0), (0.0, 0.0, 0.0), (0.0, 0.0, -10.0))
    manager.update(0.1)
    assert all(math.isfinite(c) for c in p.direction)
    assert length(p.direction) == pytest.approx(1.0)


def test_homing_launch_builds_transform():
    manager = ProjectileManager()
    p = ProjectileHoming(manager)
    p.launch((0.0, 0.0, 2.0), (5.0, 6.0, 7.0), (0.0, 0.0, 0.0))
    assert p.transform[3] == pytest.approx((5.0, 6.0, 7.0, 1.0))
    assert p.direction == pytest.approx((0.0, 0.0, 1.0))