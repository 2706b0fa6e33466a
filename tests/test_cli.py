import math

import pytest

from tokamaksim.cli import (
    ArtifactExportConfig,
    CliError,
    CliOptions,
    parse_args,
    scenario_description,
    usage_text,
)
from tokamaksim.config import (
    ChargeAssignmentScheme,
    ElectricFieldMode,
    ElectrostaticBoundaryCondition,
    PlasmaCurrentProfileKind,
    RunConfig,
    Scenario,
    WallBoundaryMode,
)


def test_empty_arguments_give_defaults():
    options = parse_args([])
    assert options.run_config == RunConfig()
    assert options.artifact_config == ArtifactExportConfig()
    assert options.export_artifacts is True
    assert options.help_requested is False


def test_artifact_defaults_match_source():
    config = CliOptions().artifact_config
    assert config.output_root_directory == "output/runs"
    assert config.max_particles_per_snapshot == 50000


def test_help_stops_parsing():
    options = parse_args(["--help", "--bogus"])
    assert options.help_requested is True


@pytest.mark.parametrize(
    "text, expected",
    [("cold", Scenario.COLD_VACUUM), ("NBI_IGNITION", Scenario.NBI_IGNITION), ("failure", Scenario.MAGNETIC_FAILURE)],
)
def test_scenario_option(text, expected):
    assert parse_args(["--scenario", text]).run_config.scenario is expected


def test_invalid_scenario_message():
    with pytest.raises(CliError, match="Invalid scenario: warm"):
        parse_args(["--scenario", "warm"])


def test_seed_bounds():
    assert parse_args(["--seed", "4294967295"]).run_config.seed == 4294967295
    with pytest.raises(CliError, match="Invalid seed"):
        parse_args(["--seed", "4294967296"])
    with pytest.raises(CliError, match="Invalid seed"):
        parse_args(["--seed", "-1"])


def test_numeric_options_set_values():
    options = parse_args(
        [
            "--dt", "1e-8",
            "--steps", "7",
            "--telemetry-every", "3",
            "--particle-cap", "1234",
            "--mag-field-bins", "8",
            "--mag-field-dt-safety", "0.1",
            "--electrostatic-grid-bins", "16",
            "--electrostatic-tol", "1e-4",
            "--electrostatic-max-iters", "200",
            "--electrostatic-omega", "1.5",
            "--fusion-cross-section-scale", "2.5",
            "--fusion-probability-clamp", "0.5",
            "--fusion-min-energy-kev", "10",
            "--fusion-diagnostics-bins", "12",
            "--recycle-fraction", "0.25",
        ]
    )
    run = options.run_config
    assert run.time_step_s == 1e-8
    assert run.total_steps == 7
    assert run.telemetry_every_n_steps == 3
    assert run.particle_cap == 1234
    assert run.magnetic_field_radial_bin_count == 8
    assert run.magnetic_field_dt_safety_fraction == 0.1
    assert run.electrostatic_grid_bin_count == 16
    assert run.electrostatic_solver_tolerance == 1e-4
    assert run.electrostatic_solver_max_iterations == 200
    assert run.electrostatic_sor_omega == 1.5
    assert run.fusion_cross_section_scale == 2.5
    assert run.fusion_probability_clamp == 0.5
    assert run.fusion_min_energy_kev == 10.0
    assert run.fusion_diagnostics_radial_bins == 12
    assert run.recycle_fraction == 0.25


def test_enum_options_set_values():
    run = parse_args(
        [
            "--electric-field-mode", "electrostatic",
            "--electrostatic-bc", "NEUMANN0",
            "--charge-assignment", "ngp",
            "--wall-boundary-mode", "absorb",
            "--current-profile", "parabolic",
        ]
    ).run_config
    assert run.electric_field_mode is ElectricFieldMode.ELECTROSTATIC
    assert run.electrostatic_boundary_condition is ElectrostaticBoundaryCondition.NEUMANN_ZERO_GRADIENT
    assert run.charge_assignment_scheme is ChargeAssignmentScheme.NGP
    assert run.wall_boundary_mode is WallBoundaryMode.ABSORB
    assert run.plasma_current_profile_kind is PlasmaCurrentProfileKind.PARABOLIC


@pytest.mark.parametrize(
    "args, message",
    [
        (["--dt", "-1"], "Invalid dt: -1"),
        (["--dt", "1e39"], "Invalid dt: 1e39"),
        (["--dt", "abc"], "Invalid dt: abc"),
        (["--steps", "12abc"], "Invalid steps: 12abc"),
        (["--steps", "-3"], "Invalid steps: -3"),
        (["--telemetry-every", "0"], "Invalid telemetry cadence: 0"),
        (["--particle-cap", "0"], "Invalid particle cap: 0"),
        (["--current-profile-axis-epsilon", "0"], "Invalid current-profile-axis-epsilon: 0"),
        (["--current-profile-axis-blend", "-0.5"], "Invalid current-profile-axis-blend: -0.5"),
        (["--mag-field-bins", "0"], "Invalid mag-field-bins: 0"),
        (["--mag-field-dt-safety", "1e400"], "Invalid mag-field-dt-safety: 1e400"),
        (["--electrostatic-grid-bins", "1"], "Invalid electrostatic-grid-bins: 1"),
        (["--electrostatic-tol", "0"], "Invalid electrostatic-tol: 0"),
        (["--electrostatic-max-iters", "0"], "Invalid electrostatic-max-iters: 0"),
        (["--electrostatic-omega", "2"], r"Invalid electrostatic-omega: 2 \(expected 0 < omega < 2\)"),
        (["--fusion-reactivity-model", "gamow"], "Invalid fusion-reactivity-model value: gamow"),
        (["--fusion-probability-clamp", "1.5"], "Invalid fusion-probability-clamp: 1.5"),
        (["--fusion-diagnostics-bins", "0"], "Invalid fusion-diagnostics-bins: 0"),
        (["--wall-boundary-mode", "bounce"], "Invalid wall-boundary-mode value: bounce"),
        (["--recycle-fraction", "-0.1"], "Invalid recycle-fraction: -0.1"),
        (["--artifact-every", "0"], "Invalid artifact cadence: 0"),
        (["--particle-snapshot-every", "-2"], "Invalid particle snapshot cadence: -2"),
        (["--particle-snapshot-max", "0"], "Invalid particle snapshot max: 0"),
    ],
)
def test_invalid_values(args, message):
    with pytest.raises(CliError, match=message):
        parse_args(args)


def test_nan_dt_is_accepted_like_source():
    run = parse_args(["--dt", "nan", "--steps", "4"]).run_config
    assert math.isnan(run.time_step_s)
    assert run.total_steps == 4


def test_missing_value():
    with pytest.raises(CliError, match="Missing value for --steps"):
        parse_args(["--steps"])


def test_unknown_option():
    with pytest.raises(CliError, match="Unknown option: --turbo"):
        parse_args(["--turbo"])


def test_artifact_options():
    options = parse_args(
        [
            "--artifacts-root", "runs/out",
            "--artifact-every", "5",
            "--particle-snapshot-every", "9",
            "--particle-snapshot-max", "77",
            "--no-artifacts",
        ]
    )
    assert options.artifact_config.output_root_directory == "runs/out"
    assert options.artifact_config.metrics_every_n_steps == 5
    assert options.artifact_config.particle_snapshot_every_n_steps == 9
    assert options.artifact_config.max_particles_per_snapshot == 77
    assert options.export_artifacts is False


def test_custom_profile_with_table(tmp_path):
    table = tmp_path / "profile.csv"
    table.write_text("rho,fraction\n0.0,0.0\n0.5,0.3\n1.0,1.0\n")
    run = parse_args(["--current-profile", "custom", "--current-profile-table", str(table)]).run_config
    assert run.plasma_current_profile_kind is PlasmaCurrentProfileKind.CUSTOM_TABLE
    assert [(p.normalized_minor_radius, p.enclosed_current_fraction) for p in run.plasma_current_custom_table] == [
        (0.0, 0.0),
        (0.5, 0.3),
        (1.0, 1.0),
    ]


def test_custom_profile_requires_table():
    with pytest.raises(CliError, match="Custom current profile requires --current-profile-table"):
        parse_args(["--current-profile", "custom"])


def test_table_requires_custom_profile(tmp_path):
    table = tmp_path / "profile.csv"
    table.write_text("0.5 0.5\n")
    with pytest.raises(CliError, match="--current-profile-table requires --current-profile custom"):
        parse_args(["--current-profile-table", str(table)])


def test_unreadable_table(tmp_path):
    missing = tmp_path / "missing.csv"
    with pytest.raises(CliError, match="Unable to open current-profile table file"):
        parse_args(["--current-profile", "custom", "--current-profile-table", str(missing)])


def test_usage_text_lists_options():
    text = usage_text("tokamaksim")
    assert text.startswith("Usage: tokamaksim [options]\n")
    assert "  --scenario <cold|ignition|failure>\n" in text
    assert text.endswith("  --help\n")


def test_scenario_descriptions():
    assert scenario_description(Scenario.COLD_VACUUM) == "Cold Vacuum. No NBI Heating."
    assert scenario_description(Scenario.MAGNETIC_FAILURE) == "Magnetic Failure. Poloidal field collapsing."
    assert scenario_description(Scenario.NBI_IGNITION).startswith("NBI Ignition.")