import math
import random

import pytest

from railshot import mathutils as mu


class _FixedRng:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def _approx_matrix(m):
    return [pytest.approx(list(row), abs=1e-9) for row in m]


def test_random_range_bounds_follow_rng():
    assert mu.random_range(3.0, 5.0, _FixedRng(0.0)) == 3.0
    assert mu.random_range(3.0, 5.0, _FixedRng(1.0)) == 5.0


def test_random_range_stays_in_interval():
    rng = random.Random(7)
    values = [mu.random_range(-math.pi, math.pi, rng) for _ in range(200)]
    assert all(-math.pi <= v <= math.pi for v in values)


def test_cross_is_orthogonal_to_inputs():
    a = (1.0, 2.0, 3.0)
    b = (-4.0, 0.5, 2.0)
    c = mu.cross(a, b)
    assert mu.dot(c, a) == pytest.approx(0.0)
    assert mu.dot(c, b) == pytest.approx(0.0)


def test_cross_of_axes():
    assert mu.cross((1, 0, 0), (0, 1, 0)) == (0, 0, 1)


def test_normalize_gives_unit_length():
    assert mu.length(mu.normalize((3.0, -7.0, 2.0))) == pytest.approx(1.0)


def test_normalize_zero_vector_stays_zero():
    assert mu.normalize((0.0, 0.0, 0.0)) == (0.0, 0.0, 0.0)


def test_identity_is_neutral_for_mat_mul():
    m = mu.rotation_roll_pitch_yaw(0.3, -1.1, 0.7)
    assert _approx_matrix(mu.mat_mul(mu.identity(), m)) == [list(r) for r in m]
    assert _approx_matrix(mu.mat_mul(m, mu.identity())) == [list(r) for r in m]


def test_translation_composes_additively():
    m = mu.mat_mul(mu.translation(1, 2, 3), mu.translation(-1, 5, 0.5))
    assert m[3][:3] == pytest.approx((0.0, 7.0, 3.5))


def test_scaling_diagonal():
    m = mu.scaling(2.0, 3.0, 4.0)
    assert [m[i][i] for i in range(4)] == [2.0, 3.0, 4.0, 1.0]


def test_rotation_is_orthonormal():
    m = mu.rotation_roll_pitch_yaw(0.4, 2.0, -0.9)
    rows = [r[:3] for r in m[:3]]
    for i, a in enumerate(rows):
        for j, b in enumerate(rows):
            assert mu.dot(a, b) == pytest.approx(1.0 if i == j else 0.0)


def test_zero_rotation_front_is_positive_z():
    m = mu.rotation_roll_pitch_yaw(0.0, 0.0, 0.0)
    assert m[2][:3] == pytest.approx((0.0, 0.0, 1.0))


def test_rotation_axis_matches_yaw():
    angle = 0.8
    a = mu.rotation_axis((0.0, 2.0, 0.0), angle)
    b = mu.rotation_roll_pitch_yaw(0.0, angle, 0.0)
    assert _approx_matrix(a) == [list(r) for r in b]


def test_rotation_axis_keeps_axis_fixed():
    axis = mu.normalize((1.0, 1.0, 0.0))
    rotated = mu.transform_normal(axis, mu.rotation_axis(axis, 1.3))
    assert rotated == pytest.approx(axis)


def test_rotation_axis_rejects_zero_axis():
    with pytest.raises(ValueError):
        mu.rotation_axis((0.0, 0.0, 0.0), 1.0)


def test_transform_normal_ignores_translation():
    v = (1.0, -2.0, 0.5)
    assert mu.transform_normal(v, mu.translation(10, 20, 30)) == pytest.approx(v)


def test_look_at_maps_eye_to_origin():
    eye = (0.0, 10.0, -10.0)
    view = mu.look_at_lh(eye, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    moved = mu.mat_mul(mu.translation(*eye), view)
    assert moved[3] == pytest.approx((0.0, 0.0, 0.0, 1.0))


def test_look_at_direction_becomes_z_axis():
    eye = (1.0, 2.0, 3.0)
    focus = (4.0, -1.0, 7.0)
    view = mu.look_at_lh(eye, focus, (0.0, 1.0, 0.0))
    direction = mu.normalize(tuple(f - e for f, e in zip(focus, eye)))
    assert mu.transform_normal(direction, view) == pytest.approx((0.0, 0.0, 1.0))


def test_look_at_rejects_same_eye_and_focus():
    with pytest.raises(ValueError):
        mu.look_at_lh((1, 1, 1), (1, 1, 1), (0, 1, 0))


def test_perspective_depth_range():
    near, far = 0.1, 1000.0
    p = mu.perspective_fov_lh(math.radians(45), 16 / 9, near, far)
    assert p[2][2] * near + p[3][2] == pytest.approx(0.0, abs=1e-9)
    assert (p[2][2] * far + p[3][2]) / far == pytest.approx(1.0)
    assert p[2][3] == 1.0
    assert p[0][0] * (16 / 9) == pytest.approx(p[1][1])


@pytest.mark.parametrize(
    "args",
    [
        (math.radians(45), 1.0, 0.0, 100.0),
        (math.radians(45), 1.0, 1.0, -5.0),
        (0.0, 1.0, 0.1, 100.0),
        (math.radians(45), 0.0, 0.1, 100.0),
        (math.radians(45), 1.0, 5.0, 5.0),
    ],
)
def test_perspective_rejects_bad_parameters(args):
    with pytest.raises(ValueError):
        mu.perspective_fov_lh(*args)