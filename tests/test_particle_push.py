import math

import pytest

from tokamaksim.particle_push import boris_velocity_step, reflect_at_tokamak_wall
from tokamaksim.vec import Vec3


def test_no_fields_keep_velocity():
    v = Vec3(1.0, -2.0, 3.0)
    result = boris_velocity_step(v, Vec3(), Vec3(), 1e8, 1e-7)
    assert (result.x, result.y, result.z) == pytest.approx((1.0, -2.0, 3.0), abs=1e-12)


def test_electric_field_only_accelerates_linearly():
    e_field = Vec3(3.0, 0.0, -1.0)
    result = boris_velocity_step(Vec3(), e_field, Vec3(), 2.0, 0.25)
    assert (result.x, result.y, result.z) == pytest.approx((1.5, 0.0, -0.5), abs=1e-12)


def test_magnetic_rotation_preserves_speed_and_parallel_component():
    v = Vec3(1.0e5, 2.0e5, 3.0e4)
    b_field = Vec3(0.0, 0.0, 5.0)
    result = v
    for _ in range(50):
        result = boris_velocity_step(result, Vec3(), b_field, 4.8e7, 1e-9)
    assert result.magnitude() == pytest.approx(v.magnitude(), rel=1e-12)
    assert result.z == pytest.approx(v.z)
    assert math.hypot(result.x, result.y) == pytest.approx(math.hypot(v.x, v.y), rel=1e-12)
    assert abs(result.x - v.x) > 1.0


def test_inside_particle_is_untouched():
    pos = Vec3(2.1, 0.0, 0.1)
    vel = Vec3(1.0, 1.0, 1.0)
    outcome = reflect_at_tokamak_wall(pos, vel, 2.0, 0.5)
    assert not outcome.reflected
    assert outcome.position == pos
    assert outcome.velocity == vel


def test_near_axis_particle_is_untouched():
    pos = Vec3(0.0, 0.0, 5.0)
    outcome = reflect_at_tokamak_wall(pos, Vec3(1.0, 0.0, 0.0), 2.0, 0.5)
    assert not outcome.reflected
    assert outcome.position == pos


def test_outside_particle_is_reflected_onto_wall():
    vel = Vec3(1.0, 0.5, 0.0)
    outcome = reflect_at_tokamak_wall(Vec3(3.0, 0.0, 0.0), vel, 2.0, 0.5)
    assert outcome.reflected
    assert outcome.velocity.x == pytest.approx(-1.0)
    assert outcome.velocity.y == pytest.approx(0.5)
    assert outcome.velocity.magnitude() == pytest.approx(vel.magnitude())
    tube = math.hypot(math.hypot(outcome.position.x, outcome.position.y) - 2.0, outcome.position.z)
    assert tube == pytest.approx(0.5 * 0.99)


def test_custom_wall_placement_scale():
    outcome = reflect_at_tokamak_wall(Vec3(0.0, 2.0, 1.0), Vec3(0.0, 0.0, 2.0), 2.0, 0.5, 0.5)
    assert outcome.reflected
    assert outcome.position.z == pytest.approx(0.25)
    assert outcome.velocity.z == pytest.approx(-2.0)