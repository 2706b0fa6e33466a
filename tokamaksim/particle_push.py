"""Boris velocity update and reflective torus wall."""

from __future__ import annotations

import math
from dataclasses import dataclass

from tokamaksim.vec import Vec3


@dataclass(frozen=True)
class WallReflection:
    """Outcome of a wall check: the possibly-updated state and whether it changed."""

    position: Vec3
    velocity: Vec3
    reflected: bool


def boris_velocity_step(
    velocity: Vec3,
    electric_field: Vec3,
    magnetic_field: Vec3,
    charge_to_mass: float,
    dt_s: float,
) -> Vec3:
    """Advance a velocity by one Boris step."""
    half_dt = dt_s * 0.5
    kick = electric_field * (charge_to_mass * half_dt)
    v_minus = velocity + kick
    t = magnetic_field * (charge_to_mass * half_dt)
    v_prime = v_minus + v_minus.cross(t)
    s = t * (2.0 / (1.0 + t.dot(t)))
    v_plus = v_minus + v_prime.cross(s)
    return v_plus + kick


def reflect_at_tokamak_wall(
    position: Vec3,
    velocity: Vec3,
    major_radius_m: float,
    minor_radius_m: float,
    wall_placement_scale: float = 0.99,
) -> WallReflection:
    """Mirror a particle that left the torus back inside it."""
    radial_pos = math.hypot(position.x, position.y)
    radial_tube = math.hypot(radial_pos - major_radius_m, position.z)
    if radial_tube < minor_radius_m or radial_pos <= 0.001:
        return WallReflection(position, velocity, False)

    core_center = Vec3(
        major_radius_m * (position.x / radial_pos),
        major_radius_m * (position.y / radial_pos),
        0.0,
    )
    normal = (position - core_center).normalized()
    new_velocity = velocity - normal * (2.0 * velocity.dot(normal))
    new_position = core_center + normal * (minor_radius_m * wall_placement_scale)
    return WallReflection(new_position, new_velocity, True)