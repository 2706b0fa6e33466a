"""D-T fusion cross-section versus energy table."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

from tokamaksim.config import FusionReactivityModelKind

BARN_TO_SQUARE_METER = 1.0e-28


@dataclass(frozen=True)
class SigmaETablePoint:
    energy_kev: float = 0.0
    sigma_m2: float = 0.0


_DEFAULT_DT_POINTS_BARN = (
    (0.0, 0.0),
    (5.0, 0.01),
    (10.0, 0.05),
    (20.0, 0.20),
    (30.0, 0.45),
    (50.0, 1.20),
    (80.0, 2.20),
    (120.0, 3.00),
    (200.0, 3.60),
    (300.0, 4.00),
    (500.0, 4.30),
)


def make_default_dt_sigma_e_table() -> List[SigmaETablePoint]:
    """Built-in D-T cross sections, in square metres."""
    return [SigmaETablePoint(e, s * BARN_TO_SQUARE_METER) for e, s in _DEFAULT_DT_POINTS_BARN]


_DEFAULT_DT_TABLE = tuple(make_default_dt_sigma_e_table())


def is_valid_sigma_e_table(table: Sequence[SigmaETablePoint]) -> bool:
    """At least two finite, non-negative points with strictly rising energies."""
    if len(table) < 2:
        return False
    for point in table:
        if not (math.isfinite(point.energy_kev) and math.isfinite(point.sigma_m2)):
            return False
        if point.energy_kev < 0.0 or point.sigma_m2 < 0.0:
            return False
    return all(a.energy_kev < b.energy_kev for a, b in zip(table, table[1:]))


def evaluate_sigma_from_table(energy_kev: float, table: Sequence[SigmaETablePoint]) -> float:
    """Linearly interpolated cross section, clamped at the table ends; 0 if unusable."""
    if not is_valid_sigma_e_table(table) or not math.isfinite(energy_kev):
        return 0.0
    if energy_kev <= table[0].energy_kev:
        return table[0].sigma_m2
    if energy_kev >= table[-1].energy_kev:
        return table[-1].sigma_m2
    for left, right in zip(table, table[1:]):
        if energy_kev <= right.energy_kev:
            t = (energy_kev - left.energy_kev) / (right.energy_kev - left.energy_kev)
            return left.sigma_m2 + t * (right.sigma_m2 - left.sigma_m2)
    return table[-1].sigma_m2


def evaluate_dt_sigma_m2(
    energy_kev: float, kind: FusionReactivityModelKind = FusionReactivityModelKind.SIGMA_E_TABLE
) -> float:
    """D-T cross section in square metres for the chosen model."""
    if kind is FusionReactivityModelKind.SIGMA_E_TABLE:
        return evaluate_sigma_from_table(energy_kev, _DEFAULT_DT_TABLE)
    return 0.0