"""Physical constants, enumerations and run configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from tokamaksim.vec import Vec3

PI = 3.14159265359
MU0 = 1.25663706e-6
ELEMENTARY_CHARGE_C = 1.60217663e-19
MASS_DEUTERIUM_KG = 3.3435e-27
MASS_TRITIUM_KG = 5.0082e-27
MASS_HELIUM4_KG = 6.6464e-27
BOLTZMANN_J_PER_K = 1.380649e-23
DEFAULT_MAX_PARTICLES = 2_500_000


class Scenario(Enum):
    COLD_VACUUM = 0
    NBI_IGNITION = 1
    MAGNETIC_FAILURE = 2


class ParticleType(Enum):
    DEUTERIUM = 0
    TRITIUM = 1
    HELIUM = 2
    DEAD = 3


class PlasmaCurrentProfileKind(Enum):
    UNIFORM = 0
    PARABOLIC = 1
    CUSTOM_TABLE = 2


class ElectricFieldMode(Enum):
    PLACEHOLDER = 0
    ELECTROSTATIC = 1


class ElectrostaticBoundaryCondition(Enum):
    DIRICHLET_ZERO = 0
    NEUMANN_ZERO_GRADIENT = 1


class ChargeAssignmentScheme(Enum):
    NGP = 0
    CIC = 1


class FusionReactivityModelKind(Enum):
    SIGMA_E_TABLE = 0


class WallBoundaryMode(Enum):
    REFLECT = 0
    ABSORB = 1
    RECYCLE = 2


@dataclass
class CurrentProfilePoint:
    normalized_minor_radius: float = 0.0
    enclosed_current_fraction: float = 0.0


_SCENARIO_NAMES = {
    Scenario.COLD_VACUUM: "COLD_VACUUM",
    Scenario.NBI_IGNITION: "NBI_IGNITION",
    Scenario.MAGNETIC_FAILURE: "MAGNETIC_FAILURE",
}
_SCENARIO_ALIASES = {
    "cold": Scenario.COLD_VACUUM,
    "COLD_VACUUM": Scenario.COLD_VACUUM,
    "ignition": Scenario.NBI_IGNITION,
    "NBI_IGNITION": Scenario.NBI_IGNITION,
    "failure": Scenario.MAGNETIC_FAILURE,
    "MAGNETIC_FAILURE": Scenario.MAGNETIC_FAILURE,
}

_PROFILE_NAMES = {
    PlasmaCurrentProfileKind.UNIFORM: "uniform",
    PlasmaCurrentProfileKind.PARABOLIC: "parabolic",
    PlasmaCurrentProfileKind.CUSTOM_TABLE: "custom",
}
_FIELD_MODE_NAMES = {
    ElectricFieldMode.PLACEHOLDER: "placeholder",
    ElectricFieldMode.ELECTROSTATIC: "electrostatic",
}
_BOUNDARY_NAMES = {
    ElectrostaticBoundaryCondition.DIRICHLET_ZERO: "dirichlet0",
    ElectrostaticBoundaryCondition.NEUMANN_ZERO_GRADIENT: "neumann0",
}
_SCHEME_NAMES = {
    ChargeAssignmentScheme.NGP: "ngp",
    ChargeAssignmentScheme.CIC: "cic",
}
_REACTIVITY_NAMES = {
    FusionReactivityModelKind.SIGMA_E_TABLE: "sigmae-table",
}
_REACTIVITY_ALIASES = {
    "sigmae-table": FusionReactivityModelKind.SIGMA_E_TABLE,
    "SIGMAE_TABLE": FusionReactivityModelKind.SIGMA_E_TABLE,
    "SIGMAE-TABLE": FusionReactivityModelKind.SIGMA_E_TABLE,
}
_WALL_NAMES = {
    WallBoundaryMode.REFLECT: "reflect",
    WallBoundaryMode.ABSORB: "absorb",
    WallBoundaryMode.RECYCLE: "recycle",
}


def _lower_upper_aliases(names: dict) -> dict:
    aliases = {}
    for member, name in names.items():
        aliases[name] = member
        aliases[name.upper()] = member
    return aliases


_PROFILE_ALIASES = _lower_upper_aliases(_PROFILE_NAMES)
_FIELD_MODE_ALIASES = _lower_upper_aliases(_FIELD_MODE_NAMES)
_BOUNDARY_ALIASES = _lower_upper_aliases(_BOUNDARY_NAMES)
_SCHEME_ALIASES = _lower_upper_aliases(_SCHEME_NAMES)
_WALL_ALIASES = _lower_upper_aliases(_WALL_NAMES)


def _lookup(aliases: dict, text: str, what: str):
    try:
        return aliases[text]
    except KeyError:
        raise ValueError(f"invalid {what}: {text!r}") from None


def scenario_name(scenario: Scenario) -> str:
    return _SCENARIO_NAMES.get(scenario, "UNKNOWN")


def parse_scenario(text: str) -> Scenario:
    """Parse a scenario name; raise ValueError if unknown."""
    return _lookup(_SCENARIO_ALIASES, text, "scenario")


def plasma_current_profile_kind_name(kind: PlasmaCurrentProfileKind) -> str:
    return _PROFILE_NAMES.get(kind, "unknown")


def parse_plasma_current_profile_kind(text: str) -> PlasmaCurrentProfileKind:
    return _lookup(_PROFILE_ALIASES, text, "current profile")


def electric_field_mode_name(mode: ElectricFieldMode) -> str:
    return _FIELD_MODE_NAMES.get(mode, "unknown")


def parse_electric_field_mode(text: str) -> ElectricFieldMode:
    return _lookup(_FIELD_MODE_ALIASES, text, "electric field mode")


def electrostatic_boundary_condition_name(boundary_condition: ElectrostaticBoundaryCondition) -> str:
    return _BOUNDARY_NAMES.get(boundary_condition, "unknown")


def parse_electrostatic_boundary_condition(text: str) -> ElectrostaticBoundaryCondition:
    return _lookup(_BOUNDARY_ALIASES, text, "electrostatic boundary condition")


def charge_assignment_scheme_name(scheme: ChargeAssignmentScheme) -> str:
    return _SCHEME_NAMES.get(scheme, "unknown")


def parse_charge_assignment_scheme(text: str) -> ChargeAssignmentScheme:
    return _lookup(_SCHEME_ALIASES, text, "charge assignment scheme")


def fusion_reactivity_model_kind_name(kind: FusionReactivityModelKind) -> str:
    return _REACTIVITY_NAMES.get(kind, "unknown")


def parse_fusion_reactivity_model_kind(text: str) -> FusionReactivityModelKind:
    return _lookup(_REACTIVITY_ALIASES, text, "fusion reactivity model")


def wall_boundary_mode_name(mode: WallBoundaryMode) -> str:
    return _WALL_NAMES.get(mode, "unknown")


def parse_wall_boundary_mode(text: str) -> WallBoundaryMode:
    return _lookup(_WALL_ALIASES, text, "wall boundary mode")


@dataclass
class TokamakConfig:
    major_radius_m: float = 2.0
    minor_radius_m: float = 0.5
    toroidal_current_a: float = 15.0e6
    toroidal_coil_turns: int = 18
    plasma_current_a: float = 2.0e6


@dataclass
class NBIConfig:
    is_active: bool = True
    beam_energy_kev: float = 100.0
    particles_per_step: int = 50
    injector_pos: Vec3 = field(default_factory=lambda: Vec3(2.5, 0.0, 0.0))
    injection_normal: Vec3 = field(default_factory=lambda: Vec3(-1.0, 0.2, 0.0).normalized())


@dataclass
class RunConfig:
    scenario: Scenario = Scenario.NBI_IGNITION
    time_step_s: float = 1.0e-7
    total_steps: int = 10000
    telemetry_every_n_steps: int = 100
    seed: Optional[int] = None
    particle_cap: int = DEFAULT_MAX_PARTICLES

    plasma_current_profile_kind: PlasmaCurrentProfileKind = PlasmaCurrentProfileKind.UNIFORM
    plasma_current_axis_epsilon_m: float = 1.0e-4
    plasma_current_custom_axis_blend_radius_m: float = 1.0e-3
    plasma_current_custom_table: List[CurrentProfilePoint] = field(default_factory=list)

    magnetic_field_radial_bin_count: int = 32
    magnetic_field_dt_safety_fraction: float = 0.05

    electric_field_mode: ElectricFieldMode = ElectricFieldMode.PLACEHOLDER
    electrostatic_boundary_condition: ElectrostaticBoundaryCondition = (
        ElectrostaticBoundaryCondition.DIRICHLET_ZERO
    )
    charge_assignment_scheme: ChargeAssignmentScheme = ChargeAssignmentScheme.CIC
    electrostatic_grid_bin_count: int = 32
    electrostatic_solver_tolerance: float = 1.0e-6
    electrostatic_solver_max_iterations: int = 5000
    electrostatic_sor_omega: float = 1.7
    electrostatic_neutralizing_background_fraction: float = 1.0

    fusion_reactivity_model_kind: FusionReactivityModelKind = FusionReactivityModelKind.SIGMA_E_TABLE
    fusion_cross_section_scale: float = 1.0
    fusion_probability_clamp: float = 0.95
    fusion_min_energy_kev: float = 0.0
    wall_boundary_mode: WallBoundaryMode = WallBoundaryMode.REFLECT
    recycle_fraction: float = 0.0
    fusion_diagnostics_radial_bins: int = 32