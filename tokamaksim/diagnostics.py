"""Runtime counters, energy budget and telemetry snapshot records."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List


@dataclass
class RuntimeCounters:
    particle_cap_hit_events: int = 0
    rejected_injection_pairs: int = 0
    rejected_fusion_ash: int = 0
    out_of_domain_cell_clamp_events: int = 0
    wall_hit_count: int = 0
    fusion_attempts: int = 0
    fusion_accepted: int = 0
    fusion_kinetics_samples: int = 0
    max_reactions_in_cell: int = 0

    wall_impact_energy_j: float = 0.0
    wall_loss_weight: float = 0.0

    fusion_weight_attempted: float = 0.0
    fusion_weight_accepted: float = 0.0
    fuel_weight_consumed_d: float = 0.0
    fuel_weight_consumed_t: float = 0.0
    ash_weight_produced_he: float = 0.0
    fusion_sigma_sum_m2: float = 0.0
    fusion_probability_sum: float = 0.0
    fusion_relative_speed_sum_m_per_s: float = 0.0


@dataclass
class EnergyChargeBudget:
    kinetic_j: float = 0.0
    beam_injected_j: float = 0.0
    fusion_alpha_injected_j: float = 0.0
    total_charge_c: float = 0.0


@dataclass
class SpeciesCounts:
    deuterium: int = 0
    tritium: int = 0
    helium: int = 0

    def alive_count(self) -> int:
        """Number of live ions of all species."""
        return self.deuterium + self.tritium + self.helium


class ResidualSolverKind(Enum):
    NONE = 0
    SOR = 1
    OTHER = 255


class ResidualStatus(Enum):
    PLACEHOLDER = 0
    MEASURED = 1
    UNAVAILABLE = 2
    FAILED = 3


@dataclass
class SolverResidualSnapshot:
    residual_available: bool = False
    residual_l2: float = math.nan
    solver_kind: ResidualSolverKind = ResidualSolverKind.NONE
    status: ResidualStatus = ResidualStatus.PLACEHOLDER
    iterations: int = 0
    converged: bool = False
    tolerance: float = math.nan


@dataclass
class MagneticFieldDiagnostics:
    max_field_t: float = 0.0
    recommended_dt_s: float = 0.0
    radial_mean_field_t: List[float] = field(default_factory=list)
    radial_sample_counts: List[int] = field(default_factory=list)


@dataclass
class ElectrostaticDiagnostics:
    max_electric_field_v_per_m: float = 0.0
    mean_electric_field_v_per_m: float = 0.0
    solve_iterations: int = 0
    solve_converged: bool = False


@dataclass
class TelemetrySnapshot:
    step: int = 0
    time_s: float = 0.0
    active_seed: int = 0
    species: SpeciesCounts = field(default_factory=SpeciesCounts)
    avg_energy_kev: float = 0.0
    fusion_events: int = 0
    step_counters: RuntimeCounters = field(default_factory=RuntimeCounters)
    counters: RuntimeCounters = field(default_factory=RuntimeCounters)
    budget: EnergyChargeBudget = field(default_factory=EnergyChargeBudget)
    magnetic_field: MagneticFieldDiagnostics = field(default_factory=MagneticFieldDiagnostics)
    electrostatic_field: ElectrostaticDiagnostics = field(default_factory=ElectrostaticDiagnostics)
    solver_residual: SolverResidualSnapshot = field(default_factory=SolverResidualSnapshot)