"""Toroidal and poloidal magnetic field model with plasma current profiles."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Sequence

from tokamaksim.config import (
    ELEMENTARY_CHARGE_C,
    MASS_DEUTERIUM_KG,
    MASS_HELIUM4_KG,
    MASS_TRITIUM_KG,
    MU0,
    PI,
    CurrentProfilePoint,
    PlasmaCurrentProfileKind,
    TokamakConfig,
)
from tokamaksim.vec import Vec3

_TWO_PI = 2.0 * PI
_MERGE_EPSILON = 1.0e-6


@dataclass
class PlasmaCurrentProfileConfig:
    kind: PlasmaCurrentProfileKind = PlasmaCurrentProfileKind.UNIFORM
    axis_epsilon_m: float = 1.0e-4
    custom_axis_blend_radius_m: float = 1.0e-3
    custom_table: List[CurrentProfilePoint] = field(default_factory=list)


@dataclass
class MagneticFieldSample:
    total_field_t: Vec3 = field(default_factory=Vec3)
    toroidal_field_t: Vec3 = field(default_factory=Vec3)
    poloidal_field_t: Vec3 = field(default_factory=Vec3)
    total_magnitude_t: float = 0.0
    major_radius_m: float = 0.0
    minor_radius_m: float = 0.0
    normalized_minor_radius: float = 0.0
    enclosed_current_fraction: float = 0.0


def _clamp01(value: float) -> float:
    return max(0.0, min(value, 1.0))


def _smooth_step01(t: float) -> float:
    c = _clamp01(t)
    return c * c * (3.0 - 2.0 * c)


def _sanitize_custom_table(table: Sequence[CurrentProfilePoint]) -> List[List[float]]:
    points = sorted(
        ([_clamp01(p.normalized_minor_radius), _clamp01(p.enclosed_current_fraction)] for p in table),
        key=lambda p: p[0],
    )
    if not points:
        return [[0.0, 0.0], [1.0, 1.0]]

    deduped: List[List[float]] = []
    for point in points:
        if deduped and abs(point[0] - deduped[-1][0]) <= _MERGE_EPSILON:
            deduped[-1][1] = max(deduped[-1][1], point[1])
        else:
            deduped.append(point)

    if deduped[0][0] > 0.0:
        deduped.insert(0, [0.0, 0.0])
    else:
        deduped[0] = [0.0, 0.0]

    if deduped[-1][0] < 1.0:
        deduped.append([1.0, 1.0])
    else:
        deduped[-1] = [1.0, 1.0]

    running = 0.0
    for point in deduped:
        running = max(running, point[1])
        point[1] = running
    deduped[-1][1] = 1.0
    return deduped


def _interpolate_custom_fraction(rho: float, table: List[List[float]]) -> float:
    if rho <= 0.0:
        return 0.0
    if rho >= 1.0:
        return 1.0
    if len(table) < 2:
        return rho * rho
    for (r0, f0), (r1, f1) in zip(table, table[1:]):
        if rho <= r1:
            width = max(1.0e-6, r1 - r0)
            t = (rho - r0) / width
            return _clamp01(f0 + (f1 - f0) * t)
    return 1.0


def compute_enclosed_current_fraction(
    normalized_minor_radius: float, profile_config: PlasmaCurrentProfileConfig
) -> float:
    """Fraction of plasma current enclosed within the given normalized minor radius."""
    rho = _clamp01(normalized_minor_radius)
    if rho >= 1.0:
        return 1.0
    kind = profile_config.kind
    if kind is PlasmaCurrentProfileKind.PARABOLIC:
        rho_sq = rho * rho
        return _clamp01(2.0 * rho_sq - rho_sq * rho_sq)
    if kind is PlasmaCurrentProfileKind.CUSTOM_TABLE:
        return _interpolate_custom_fraction(rho, _sanitize_custom_table(profile_config.custom_table))
    return rho * rho


def evaluate_magnetic_field_sample(
    config: TokamakConfig, profile_config: PlasmaCurrentProfileConfig, position: Vec3
) -> MagneticFieldSample:
    """Total, toroidal and poloidal field at ``position`` with geometry details."""
    axis_eps = max(1.0e-7, profile_config.axis_epsilon_m)
    major_r = math.hypot(position.x, position.y)
    major_r_safe = max(major_r, axis_eps)

    x_hat = y_hat = 0.0
    if major_r > axis_eps:
        x_hat = position.x / major_r
        y_hat = position.y / major_r

    b_tor = (MU0 * config.toroidal_coil_turns * config.toroidal_current_a) / (_TWO_PI * major_r_safe)
    toroidal = Vec3(-b_tor * y_hat, b_tor * x_hat, 0.0)

    d_r = major_r - config.major_radius_m
    r_minor = math.hypot(d_r, position.z)
    minor_safe = max(config.minor_radius_m, axis_eps)
    rho = _clamp01(r_minor / minor_safe)

    enclosed = compute_enclosed_current_fraction(rho, profile_config)
    if (
        profile_config.kind is PlasmaCurrentProfileKind.CUSTOM_TABLE
        and profile_config.custom_axis_blend_radius_m > 0.0
    ):
        blend_rho = _clamp01(profile_config.custom_axis_blend_radius_m / minor_safe)
        if blend_rho > 0.0 and rho < blend_rho:
            quadratic = rho * rho
            t = _smooth_step01(rho / blend_rho)
            enclosed = _clamp01(quadratic + (enclosed - quadratic) * t)

    enclosed_current = config.plasma_current_a * enclosed
    r_safe = max(r_minor, axis_eps)
    b_pol = (MU0 * enclosed_current) / (_TWO_PI * r_safe)
    b_r = -b_pol * (position.z / r_safe)
    b_z = b_pol * (d_r / r_safe)
    poloidal = Vec3(b_r * x_hat, b_r * y_hat, b_z)

    total = toroidal + poloidal
    return MagneticFieldSample(
        total_field_t=total,
        toroidal_field_t=toroidal,
        poloidal_field_t=poloidal,
        total_magnitude_t=total.magnitude(),
        major_radius_m=major_r,
        minor_radius_m=r_minor,
        normalized_minor_radius=rho,
        enclosed_current_fraction=enclosed,
    )


def recommend_dt_from_max_field(max_field_t: float, safety_fraction: float = 0.05) -> float:
    """Time step resolving the fastest gyration at ``max_field_t``; inf if unbounded."""
    if not math.isfinite(max_field_t) or max_field_t <= 0.0:
        return math.inf
    safety = max(0.0, safety_fraction)
    max_q_over_m = max(
        ELEMENTARY_CHARGE_C / MASS_DEUTERIUM_KG,
        ELEMENTARY_CHARGE_C / MASS_TRITIUM_KG,
        2.0 * ELEMENTARY_CHARGE_C / MASS_HELIUM4_KG,
    )
    omega = max_q_over_m * max_field_t
    if not math.isfinite(omega) or omega <= 0.0:
        return math.inf
    return safety / omega