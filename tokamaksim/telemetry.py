"""Human-readable telemetry line for a simulation snapshot."""

from __future__ import annotations

from tokamaksim.diagnostics import ResidualStatus, RuntimeCounters, TelemetrySnapshot

_STATUS_TEXT = {
    ResidualStatus.PLACEHOLDER: "placeholder",
    ResidualStatus.MEASURED: "measured",
    ResidualStatus.UNAVAILABLE: "unavailable",
    ResidualStatus.FAILED: "failed",
}


def residual_status_text(status: ResidualStatus) -> str:
    return _STATUS_TEXT.get(status, "unknown")


def _counter_block(counters: RuntimeCounters) -> str:
    return (
        f"cap-hit: {counters.particle_cap_hit_events}"
        f" rejected-injection: {counters.rejected_injection_pairs}"
        f" rejected-ash: {counters.rejected_fusion_ash}"
        f" out-of-domain-clamp: {counters.out_of_domain_cell_clamp_events}"
        f" fusion-attempts: {counters.fusion_attempts}"
        f" fusion-accepted: {counters.fusion_accepted}"
        f" fusion-w-attempted: {counters.fusion_weight_attempted:.2f}"
        f" fusion-w-accepted: {counters.fusion_weight_accepted:.2f}"
        f" wall-hits: {counters.wall_hit_count}"
        f" max-cell-reaction: {counters.max_reactions_in_cell}"
    )


def format_telemetry_line(snapshot: TelemetrySnapshot) -> str:
    """Render one telemetry line (without trailing newline)."""
    species = snapshot.species
    mag = snapshot.magnetic_field
    es = snapshot.electrostatic_field
    residual = snapshot.solver_residual
    budget = snapshot.budget
    return (
        f"[Step {snapshot.step:5d} | Time {snapshot.time_s * 1000.0:.2f} ms] "
        f"TotalIons: {species.alive_count():6d} | "
        f"D: {species.deuterium} T: {species.tritium} He: {species.helium} | "
        f"AvgE: {snapshot.avg_energy_kev:.2f} keV | "
        f"FusionEvents: {snapshot.fusion_events} | "
        f"StepCtrs {_counter_block(snapshot.step_counters)} | "
        f"Ctrs {_counter_block(snapshot.counters)}"
        f" | Bmax_T: {mag.max_field_t:.6e}"
        f" dt_gyro_recommended_s: {mag.recommended_dt_s:.6e}"
        f" | Emax_V_per_m: {es.max_electric_field_v_per_m:.6e}"
        f" Emean_V_per_m: {es.mean_electric_field_v_per_m:.6e}"
        f" solver_iters: {es.solve_iterations}"
        f" solver_converged: {'true' if es.solve_converged else 'false'}"
        f" residual_l2: {residual.residual_l2:.6e}"
        f" residual_status: {residual_status_text(residual.status)}"
        f" | Energy kinetic_J: {budget.kinetic_j:.6e}"
        f" beam_J: {budget.beam_injected_j:.6e}"
        f" fusion_alpha_J: {budget.fusion_alpha_injected_j:.6e}"
        f" total_charge_C: {budget.total_charge_c:.6e}"
    )