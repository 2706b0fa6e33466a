"""Command-line option parsing for a simulation run."""

from __future__ import annotations

import math
import re
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from tokamaksim.config import (
    CurrentProfilePoint,
    PlasmaCurrentProfileKind,
    RunConfig,
    Scenario,
    parse_charge_assignment_scheme,
    parse_electric_field_mode,
    parse_electrostatic_boundary_condition,
    parse_fusion_reactivity_model_kind,
    parse_plasma_current_profile_kind,
    parse_scenario,
    parse_wall_boundary_mode,
)
from tokamaksim.profile_table import ProfileTableError, parse_current_profile_table

OUTPUT_SCHEMA_VERSION = 2

_UINT32_MAX = 2**32 - 1
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_FLOAT32_MAX = 3.4028234663852886e38

_LEADING_SPACE = r"[ \t\n\v\f\r]*"
_UNSIGNED = re.compile(_LEADING_SPACE + r"\+?\d+")
_SIGNED = re.compile(_LEADING_SPACE + r"[+-]?\d+")
_REAL = re.compile(
    _LEADING_SPACE
    + r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)

_USAGE_OPTIONS = (
    "--scenario <cold|ignition|failure>",
    "--seed <uint32>",
    "--dt <seconds>",
    "--steps <int>",
    "--telemetry-every <int>",
    "--particle-cap <uint>",
    "--current-profile <uniform|parabolic|custom>",
    "--current-profile-axis-epsilon <meters>",
    "--current-profile-axis-blend <meters>",
    "--current-profile-table <csv_path>",
    "--mag-field-bins <N>",
    "--mag-field-dt-safety <fraction>",
    "--electric-field-mode <placeholder|electrostatic>",
    "--electrostatic-bc <dirichlet0|neumann0>",
    "--charge-assignment <ngp|cic>",
    "--electrostatic-grid-bins <N>",
    "--electrostatic-tol <value>",
    "--electrostatic-max-iters <N>",
    "--electrostatic-omega <value>",
    "--fusion-reactivity-model <sigmae-table>",
    "--fusion-cross-section-scale <value>",
    "--fusion-probability-clamp <fraction>",
    "--fusion-min-energy-kev <value>",
    "--fusion-diagnostics-bins <N>",
    "--wall-boundary-mode <reflect|absorb|recycle>",
    "--recycle-fraction <fraction>",
    "--artifacts-root <path>",
    "--artifact-every <int>",
    "--particle-snapshot-every <int>",
    "--particle-snapshot-max <uint>",
    "--no-artifacts",
    "--help",
)

_SCENARIO_DESCRIPTIONS = {
    Scenario.COLD_VACUUM: "Cold Vacuum. No NBI Heating.",
    Scenario.NBI_IGNITION: "NBI Ignition. High power heating to target fusion.",
    Scenario.MAGNETIC_FAILURE: "Magnetic Failure. Poloidal field collapsing.",
}


class CliError(ValueError):
    """The command line holds an unknown option or an invalid value."""


@dataclass
class ArtifactExportConfig:
    output_root_directory: str = "output/runs"
    metrics_every_n_steps: int = 100
    particle_snapshot_every_n_steps: int = 100
    max_particles_per_snapshot: int = 50000
    radial_bin_count: int = 32
    speed_histogram_bin_count: int = 40
    pitch_histogram_bin_count: int = 36


@dataclass
class CliOptions:
    run_config: RunConfig = field(default_factory=RunConfig)
    artifact_config: ArtifactExportConfig = field(default_factory=ArtifactExportConfig)
    export_artifacts: bool = True
    help_requested: bool = False


def _parse_uint32(text: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise ValueError(text)
    value = int(text)
    if value > _UINT32_MAX:
        raise ValueError(text)
    return value


def _parse_size(text: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise ValueError(text)
    return int(text)


def _parse_int(text: str) -> int:
    if not _SIGNED.fullmatch(text):
        raise ValueError(text)
    value = int(text)
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(text)
    return value


def _parse_real(text: str, limit: float) -> float:
    match = _REAL.fullmatch(text)
    if match is None:
        raise ValueError(text)
    value = float(text)
    literal_infinite = "inf" in text.lower()
    if not literal_infinite and (math.isinf(value) or abs(value) > limit):
        raise ValueError(text)
    return value


def _parse_float(text: str) -> float:
    return _parse_real(text, _FLOAT32_MAX)


def _parse_double(text: str) -> float:
    return _parse_real(text, sys.float_info.max)


def _never(_value: Any) -> bool:
    return False


@dataclass(frozen=True)
class _ValueOption:
    section: str
    attr: str
    convert: Callable[[str], Any]
    message: str
    reject: Callable[[Any], bool] = _never

    def apply(self, options: CliOptions, text: str) -> None:
        try:
            value = self.convert(text)
        except ValueError:
            raise CliError(self.message.format(text)) from None
        if self.reject(value):
            raise CliError(self.message.format(text))
        target = options.run_config if self.section == "run" else options.artifact_config
        setattr(target, self.attr, value)


_OPTIONS: Dict[str, _ValueOption] = {
    "--scenario": _ValueOption("run", "scenario", parse_scenario, "Invalid scenario: {}"),
    "--seed": _ValueOption("run", "seed", _parse_uint32, "Invalid seed: {}"),
    "--dt": _ValueOption("run", "time_step_s", _parse_float, "Invalid dt: {}", lambda v: v < 0.0),
    "--steps": _ValueOption("run", "total_steps", _parse_int, "Invalid steps: {}", lambda v: v < 0),
    "--telemetry-every": _ValueOption(
        "run", "telemetry_every_n_steps", _parse_int, "Invalid telemetry cadence: {}", lambda v: v <= 0
    ),
    "--particle-cap": _ValueOption(
        "run", "particle_cap", _parse_size, "Invalid particle cap: {}", lambda v: v == 0
    ),
    "--current-profile": _ValueOption(
        "run",
        "plasma_current_profile_kind",
        parse_plasma_current_profile_kind,
        "Invalid current-profile value: {}",
    ),
    "--current-profile-axis-epsilon": _ValueOption(
        "run",
        "plasma_current_axis_epsilon_m",
        _parse_float,
        "Invalid current-profile-axis-epsilon: {}",
        lambda v: v <= 0.0,
    ),
    "--current-profile-axis-blend": _ValueOption(
        "run",
        "plasma_current_custom_axis_blend_radius_m",
        _parse_float,
        "Invalid current-profile-axis-blend: {}",
        lambda v: v < 0.0,
    ),
    "--mag-field-bins": _ValueOption(
        "run", "magnetic_field_radial_bin_count", _parse_size, "Invalid mag-field-bins: {}", lambda v: v == 0
    ),
    "--mag-field-dt-safety": _ValueOption(
        "run",
        "magnetic_field_dt_safety_fraction",
        _parse_double,
        "Invalid mag-field-dt-safety: {}",
        lambda v: v < 0.0,
    ),
    "--electric-field-mode": _ValueOption(
        "run", "electric_field_mode", parse_electric_field_mode, "Invalid electric-field-mode value: {}"
    ),
    "--electrostatic-bc": _ValueOption(
        "run",
        "electrostatic_boundary_condition",
        parse_electrostatic_boundary_condition,
        "Invalid electrostatic-bc value: {}",
    ),
    "--charge-assignment": _ValueOption(
        "run", "charge_assignment_scheme", parse_charge_assignment_scheme, "Invalid charge-assignment value: {}"
    ),
    "--electrostatic-grid-bins": _ValueOption(
        "run",
        "electrostatic_grid_bin_count",
        _parse_size,
        "Invalid electrostatic-grid-bins: {}",
        lambda v: v < 2,
    ),
    "--electrostatic-tol": _ValueOption(
        "run", "electrostatic_solver_tolerance", _parse_double, "Invalid electrostatic-tol: {}", lambda v: v <= 0.0
    ),
    "--electrostatic-max-iters": _ValueOption(
        "run",
        "electrostatic_solver_max_iterations",
        _parse_uint32,
        "Invalid electrostatic-max-iters: {}",
        lambda v: v == 0,
    ),
    "--electrostatic-omega": _ValueOption(
        "run",
        "electrostatic_sor_omega",
        _parse_double,
        "Invalid electrostatic-omega: {} (expected 0 < omega < 2)",
        lambda v: v <= 0.0 or v >= 2.0,
    ),
    "--fusion-reactivity-model": _ValueOption(
        "run",
        "fusion_reactivity_model_kind",
        parse_fusion_reactivity_model_kind,
        "Invalid fusion-reactivity-model value: {}",
    ),
    "--fusion-cross-section-scale": _ValueOption(
        "run", "fusion_cross_section_scale", _parse_double, "Invalid fusion-cross-section-scale: {}", lambda v: v < 0.0
    ),
    "--fusion-probability-clamp": _ValueOption(
        "run",
        "fusion_probability_clamp",
        _parse_double,
        "Invalid fusion-probability-clamp: {} (expected 0 <= clamp <= 1)",
        lambda v: v < 0.0 or v > 1.0,
    ),
    "--fusion-min-energy-kev": _ValueOption(
        "run", "fusion_min_energy_kev", _parse_double, "Invalid fusion-min-energy-kev: {}", lambda v: v < 0.0
    ),
    "--fusion-diagnostics-bins": _ValueOption(
        "run", "fusion_diagnostics_radial_bins", _parse_size, "Invalid fusion-diagnostics-bins: {}", lambda v: v == 0
    ),
    "--wall-boundary-mode": _ValueOption(
        "run", "wall_boundary_mode", parse_wall_boundary_mode, "Invalid wall-boundary-mode value: {}"
    ),
    "--recycle-fraction": _ValueOption(
        "run",
        "recycle_fraction",
        _parse_double,
        "Invalid recycle-fraction: {} (expected 0 <= fraction <= 1)",
        lambda v: v < 0.0 or v > 1.0,
    ),
    "--artifacts-root": _ValueOption("artifact", "output_root_directory", str, "Invalid artifacts root: {}"),
    "--artifact-every": _ValueOption(
        "artifact", "metrics_every_n_steps", _parse_int, "Invalid artifact cadence: {}", lambda v: v <= 0
    ),
    "--particle-snapshot-every": _ValueOption(
        "artifact",
        "particle_snapshot_every_n_steps",
        _parse_int,
        "Invalid particle snapshot cadence: {}",
        lambda v: v <= 0,
    ),
    "--particle-snapshot-max": _ValueOption(
        "artifact", "max_particles_per_snapshot", _parse_size, "Invalid particle snapshot max: {}", lambda v: v == 0
    ),
}


def usage_text(prog: str) -> str:
    """Help text listing every option."""
    lines = [f"Usage: {prog} [options]"]
    lines.extend(f"  {option}" for option in _USAGE_OPTIONS)
    return "\n".join(lines) + "\n"


def scenario_description(scenario: Scenario) -> str:
    return _SCENARIO_DESCRIPTIONS.get(scenario, "Unknown")


def _load_table(path: str) -> List[CurrentProfilePoint]:
    try:
        return parse_current_profile_table(path)
    except ProfileTableError as exc:
        raise CliError(str(exc)) from None


def parse_args(argv: Optional[Sequence[str]] = None) -> CliOptions:
    """Parse command-line arguments (without the program name); raise CliError if invalid.

    ``--help`` stops parsing and returns options with ``help_requested`` set.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    options = CliOptions()
    remaining = iter(args)

    for arg in remaining:
        if arg == "--help":
            options.help_requested = True
            return options
        if arg == "--no-artifacts":
            options.export_artifacts = False
            continue

        spec = _OPTIONS.get(arg)
        if spec is None and arg != "--current-profile-table":
            raise CliError(f"Unknown option: {arg}")

        value = next(remaining, None)
        if value is None:
            raise CliError(f"Missing value for {arg}")

        if spec is None:
            options.run_config.plasma_current_custom_table = _load_table(value)
        else:
            spec.apply(options, value)

    run = options.run_config
    is_custom = run.plasma_current_profile_kind is PlasmaCurrentProfileKind.CUSTOM_TABLE
    if is_custom and not run.plasma_current_custom_table:
        raise CliError("Custom current profile requires --current-profile-table <csv_path>")
    if not is_custom and run.plasma_current_custom_table:
        raise CliError("--current-profile-table requires --current-profile custom")
    return options