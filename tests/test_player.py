import math

import pytest

from railshot.enemy import Enemy
from railshot.player import GOAL_Z, Player, PlayerInput
from railshot.projectile import ProjectileStraight


def _player_with_camera():
    player = Player()
    player.camera.set_look_at((0.0, 10.0, -10.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    return player


def test_initialize_resets_run():
    player = Player(position=(1.0, 2.0, 3.0), score=99, combo=4, shot_count=7)
    player.initialize()
    assert player.position == (0.0, 0.0, 0.0)
    assert player.score == 0
    assert player.combo == 0
    assert player.shot_count == 0
    assert player.scale == (0.01, 0.01, 0.01)


def test_move_vec_follows_camera_right():
    player = _player_with_camera()
    vec = player.get_move_vec(PlayerInput(move_x=1.0))
    assert vec == pytest.approx((1.0, 0.0, 0.0))


def test_move_vec_is_horizontal():
    player = _player_with_camera()
    vec = player.get_move_vec(PlayerInput(move_x=0.3, move_y=-0.8))
    assert vec[1] == 0.0


def test_jump_limit_and_landing():
    player = Player()
    for _ in range(3):
        player.input_jump(PlayerInput(jump=True))
    assert player.jump_count == player.jump_limit
    assert player.velocity[1] == player.jump_speed
    player.on_landing()
    assert player.jump_count == 0


def test_fire_spawns_projectile_at_camera():
    player = _player_with_camera()
    inputs = PlayerInput(mouse_x=player.screen_width / 2, mouse_y=player.screen_height / 2, fire=True)
    player.input_projectile(inputs)
    assert player.shot_count == 1
    assert len(player.projectile_manager) == 1
    eye = player.camera.eye
    projectile = player.projectile_manager[0]
    assert projectile.position == pytest.approx((eye[0], eye[1] + 0.01, eye[2]))
    assert projectile.direction[0] == pytest.approx(0.0)


def test_fire_at_right_edge_spreads_aim():
    player = _player_with_camera()
    player.input_projectile(PlayerInput(mouse_x=player.screen_width, mouse_y=player.screen_height / 2, fire=True))
    assert player.projectile_manager[0].direction[0] == pytest.approx(0.65)
    assert player.mouse_x == player.screen_width


def test_no_fire_when_out_of_shots():
    player = _player_with_camera()
    player.shot_count = player.max_shot_count
    player.input_projectile(PlayerInput(fire=True))
    assert len(player.projectile_manager) == 0


def test_update_cruises_forward():
    player = Player()
    player.update(1 / 60, PlayerInput())
    assert player.position[2] == pytest.approx(-0.05)


def test_update_brake_slows_and_costs_score():
    player = Player()
    player.update(0.6, PlayerInput(brake=True))
    assert player.position[2] == pytest.approx(-0.03)
    player.update(0.6, PlayerInput(brake=True))
    assert player.score == -1
    assert player.brake_time == pytest.approx(0.2)


def test_update_out_of_shots_speeds_up():
    player = Player(shot_count=20)
    player.update(1 / 60, PlayerInput())
    assert player.position[2] == pytest.approx(-0.3)


def test_update_stops_at_goal():
    player = Player(position=(0.0, 0.0, -400.0))
    player.update(1 / 60, PlayerInput())
    assert player.position[2] == GOAL_Z


def test_stomp_bounces_player():
    player = Player(position=(0.0, 1.5, 0.0))
    enemy = Enemy(position=(0.0, 0.0, 0.0))
    player.enemies.register(enemy)
    player.collide_with_enemies()
    assert player.velocity[1] == pytest.approx(player.jump_speed * 0.5)
    assert enemy.position == (0.0, 0.0, 0.0)


def test_side_collision_pushes_enemy():
    player = Player()
    enemy = Enemy(position=(0.3, 0.0, 0.0))
    player.enemies.register(enemy)
    player.collide_with_enemies()
    assert math.hypot(enemy.position[0], enemy.position[2]) == pytest.approx(player.radius + enemy.radius)


def _shoot_at(player, position):
    projectile = ProjectileStraight(player.projectile_manager)
    projectile.launch((0.0, 0.0, -1.0), position)
    return projectile


def test_projectile_hit_scores_and_destroys():
    player = Player()
    enemy = Enemy(position=(0.0, 0.0, -5.0), score=10)
    player.enemies.register(enemy)
    _shoot_at(player, (0.0, 0.5, -5.0))
    hits = []
    player.on_hit = hits.append
    player.collide_projectiles_with_enemies()
    assert player.score == 10
    assert enemy.health == 0
    assert player.combo == 0
    assert hits == [enemy]
    player.projectile_manager.update(0.0)
    assert len(player.projectile_manager) == 0


def test_combo_bonus():
    player = Player()
    for x in (0.0, 10.0):
        player.enemies.register(Enemy(position=(x, 0.0, -5.0), score=10, combo=True))
        _shoot_at(player, (x, 0.5, -5.0))
    player.collide_projectiles_with_enemies()
    assert player.combo == 2
    assert player.score == 2 * 10 + 30


def test_invincibility_blocks_second_hit():
    player = Player()
    enemy = Enemy(position=(0.0, 0.0, -5.0), score=10, health=3)
    player.enemies.register(enemy)
    _shoot_at(player, (0.0, 0.5, -5.0))
    _shoot_at(player, (0.0, 0.5, -5.0))
    player.collide_projectiles_with_enemies()
    assert enemy.health == 2
    assert player.score == 10