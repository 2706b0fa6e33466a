# tokamaksim

`tokamaksim` provides the building blocks of a small toroidal-plasma
simulation of deuterium/tritium ions in a tokamak: the toroidal and poloidal
magnetic field from coil and plasma currents, a Boris velocity update with a
reflecting torus wall, a tabulated D-T fusion cross section, a capped
particle store, a uniform spatial grid for binning particles, the diagnostic
records a run reports, and parsing of run options from a command line.

It needs nothing beyond the Python standard library and supports Python 3.10
and later.

## Modules

| Module | Contents |
| --- | --- |
| `tokamaksim.vec` | `Vec3`, an immutable 3-vector with `+`, `-`, `*`, `/`, unary `-`, iteration, `dot`, `cross`, `magnitude`, `normalized`, `is_finite` |
| `tokamaksim.config` | Physical constants (`PI`, `MU0`, `ELEMENTARY_CHARGE_C`, particle masses, `DEFAULT_MAX_PARTICLES`), enumerations (`Scenario`, `ParticleType`, `PlasmaCurrentProfileKind`, `ElectricFieldMode`, `ElectrostaticBoundaryCondition`, `ChargeAssignmentScheme`, `FusionReactivityModelKind`, `WallBoundaryMode`), the `TokamakConfig`, `NBIConfig`, `RunConfig` and `CurrentProfilePoint` records, and name/parse helpers such as `scenario_name` and `parse_scenario` |
| `tokamaksim.diagnostics` | `RuntimeCounters`, `EnergyChargeBudget`, `SpeciesCounts`, `SolverResidualSnapshot`, `MagneticFieldDiagnostics`, `ElectrostaticDiagnostics` and `TelemetrySnapshot` |
| `tokamaksim.telemetry` | `format_telemetry_line` renders a `TelemetrySnapshot` as one console line; `residual_status_text` |
| `tokamaksim.particle_system` | `ParticleSystem`, parallel lists of positions, velocities, masses, charges, weights and species, with a particle cap, input validation, `mark_dead` and `compact` |
| `tokamaksim.magnetic_field` | `evaluate_magnetic_field_sample`, `compute_enclosed_current_fraction` (uniform, parabolic and custom-table profiles) and `recommend_dt_from_max_field` |
| `tokamaksim.particle_push` | `boris_velocity_step` and `reflect_at_tokamak_wall`, which returns a `WallReflection` |
| `tokamaksim.reactivity` | The default D-T sigma(E) table, its validation and linear interpolation |
| `tokamaksim.spatial_grid` | `SpatialGrid` (`locate`, `get_cell_index`, ...) and `sort_particles_into_grid`, a counting sort by cell that returns how many positions were clamped into the grid |
| `tokamaksim.profile_table` | Reading custom enclosed-current profile tables |
| `tokamaksim.cli` | `parse_args`, `usage_text`, `scenario_description`, and the `CliOptions` and `ArtifactExportConfig` records |

## Examples

Sample the magnetic field at a point inside the plasma:

```python
from tokamaksim.config import TokamakConfig
from tokamaksim.magnetic_field import PlasmaCurrentProfileConfig, evaluate_magnetic_field_sample
from tokamaksim.vec import Vec3

sample = evaluate_magnetic_field_sample(
    TokamakConfig(), PlasmaCurrentProfileConfig(), Vec3(2.2, 0.0, 0.1)
)
print(sample.total_magnitude_t, sample.normalized_minor_radius)
```

Advance a velocity by one Boris step in that field, then check the wall:

```python
from tokamaksim.particle_push import boris_velocity_step, reflect_at_tokamak_wall

velocity = boris_velocity_step(
    Vec3(1.0e5, 0.0, 0.0), Vec3(), sample.total_field_t, 4.79e7, 1.0e-9
)
position = Vec3(2.2, 0.0, 0.1) + velocity * 1.0e-9
result = reflect_at_tokamak_wall(position, velocity, 2.0, 0.5)
print(result.reflected, result.position, result.velocity)
```

Look up the D-T fusion cross section (square metres) at a given energy in keV:

```python
from tokamaksim.reactivity import evaluate_dt_sigma_m2

print(evaluate_dt_sigma_m2(50.0))
```

Hold particles and bin them on a grid:

```python
from tokamaksim.config import ELEMENTARY_CHARGE_C, MASS_DEUTERIUM_KG, ParticleType
from tokamaksim.particle_system import ParticleSystem
from tokamaksim.spatial_grid import SpatialGrid, sort_particles_into_grid

particles = ParticleSystem(1000)
particles.add_particle(
    Vec3(2.0, 0.0, 0.0), Vec3(), MASS_DEUTERIUM_KG, ELEMENTARY_CHARGE_C,
    ParticleType.DEUTERIUM,
)
grid = SpatialGrid(2.5, 0.2)
clamped = sort_particles_into_grid(particles, grid, 2.5)
```

`add_particle` returns `False` instead of storing a particle when the cap is
reached or the position, velocity, mass, charge or weight is invalid; the
weight defaults to the system's `macro_weight`.

Parse command-line style options into a run configuration:

```python
from tokamaksim.cli import parse_args, usage_text

options = parse_args(["--scenario", "cold", "--seed", "7", "--steps", "100"])
print(options.run_config.scenario, options.run_config.seed)
print(usage_text("tokamaksim"))
```

An unknown option, a missing value or an out-of-range value raises
`tokamaksim.cli.CliError`. `--help` stops parsing and returns options with
`help_requested` set.

## Custom current profiles

A custom enclosed-current profile is a text table of
`normalized_radius enclosed_fraction` pairs, both in `[0, 1]`. Values may be
separated by spaces, tabs, commas or semicolons; blank lines and lines
starting with `#` are ignored, and non-numeric rows before the first data row
(such as a header) are skipped. Load one with
`tokamaksim.profile_table.parse_current_profile_table(path)`, or from a string
with `parse_current_profile_text`. A malformed table raises
`tokamaksim.profile_table.ProfileTableError`, which carries the offending
`line_number` where there is one. On the command line it is given with
`--current-profile custom --current-profile-table <path>`.

## What the package does not do

- There is no simulation engine or time-stepping loop: nothing here injects
  beam particles, selects or applies fusion events, or advances a whole run.
  The pieces above are what such a loop would be built from.
- There is no installed command. `parse_args` turns arguments into a
  `CliOptions` record but nothing runs a simulation from it.
- Options for the electrostatic field (`--electric-field-mode`,
  `--electrostatic-*`, `--charge-assignment`) are parsed and stored, but the
  package contains no Poisson solver or charge deposition.
- Options for run artifacts (`--artifacts-root`, `--artifact-every`,
  `--particle-snapshot-*`, `--no-artifacts`) fill an `ArtifactExportConfig`,
  but the package writes no files.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.