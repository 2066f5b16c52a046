"""
Edge-case routing ahead of the normal trend → prescription path.

Two ordered lists of (guard, handler) pairs:

ROUTES       terminal; the first matching guard produces the final
             Recommendation and the normal path never runs.
ADJUSTMENTS  non-terminal; every matching guard annotates the context
             (flags, working estimate) and the normal path continues.

Order matters: a long break is checked before the single-session case so
one very old entry is treated as "returning", not "just benchmarked".
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from .config import (
    BENCHMARK_INSTRUCTIONS,
    BENCHMARK_REPS,
    BENCHMARK_REST,
    BENCHMARK_RIR,
    BENCHMARK_SETS,
    BREAK_DAYS,
    BREAK_EXTRA_RIR,
    BREAK_REDUCTION,
    HIGH_REP_THRESHOLD,
    LONG_BREAK_DAYS,
    LONG_BREAK_REDUCTION,
    SIGNIFICANT_LOSS_FRACTION,
    PhaseParams,
)
from .exercises.base import ExerciseConfig
from .explain import build_reasoning
from .max_estimator import entry_estimate, round_half_up
from .metrics import entries_on
from .models import BenchmarkBaseline, Prescription, Recommendation, WorkoutEntry
from .prescription import adjusted_sets, effort_target, intensity_percent, round_to_increment

logger = logging.getLogger(__name__)


@dataclass
class RoutingContext:
    """Everything the guards need, computed once per recommendation."""

    exercise: str
    history: list[WorkoutEntry]  # active entries for this exercise only
    today: date
    age: int
    phase: PhaseParams
    config: ExerciseConfig
    session_count: int
    days_since_last: int | None
    last_entry: WorkoutEntry | None
    current_estimate: float
    previous_estimate: float
    working_estimate: float
    flags: list[str] = field(default_factory=list)


# =============================================================================
# TERMINAL ROUTES
# =============================================================================


def benchmark_recommendation(exercise: str, flags: list[str] | None = None) -> Recommendation:
    """
    Exploration template for an exercise without usable data.

    Args:
        exercise: Exercise name
        flags: Extra flags appended after "benchmark_mode"

    Returns:
        Benchmark-mode Recommendation (weight None, estimate 0)
    """
    prescription = Prescription(
        sets=BENCHMARK_SETS,
        reps=BENCHMARK_REPS,
        weight_kg=None,
        rest_seconds=BENCHMARK_REST,
        rir_target=BENCHMARK_RIR,
        benchmark_instructions=list(BENCHMARK_INSTRUCTIONS),
    )
    return Recommendation(
        exercise=exercise,
        prescription=prescription,
        intensity_percent=None,
        calculated_estimate_kg=0.0,
        training_status="benchmark_mode",
        rationale=(
            "Benchmark session. Work up through 3-5 sets of 5-12 reps "
            "and log every set to establish your starting strength."
        ),
        reasoning=build_reasoning(
            "benchmark_mode",
            prescription,
            None,
            "No estimate yet; load is chosen by feel during the benchmark.",
        ),
        flags=["benchmark_mode", *(flags or [])],
        benchmark_mode=True,
    )


def _no_history(ctx: RoutingContext) -> bool:
    return not ctx.history


def _handle_no_history(ctx: RoutingContext) -> Recommendation:
    return benchmark_recommendation(ctx.exercise)


def _long_break(ctx: RoutingContext) -> bool:
    return ctx.days_since_last is not None and ctx.days_since_last > BREAK_DAYS


def _handle_long_break(ctx: RoutingContext) -> Recommendation:
    days = ctx.days_since_last
    reduction = LONG_BREAK_REDUCTION if days > LONG_BREAK_DAYS else BREAK_REDUCTION
    reduced = ctx.working_estimate * (1 - reduction)
    weight = round_to_increment(reduced * ctx.phase.mid_intensity)
    pct = int(round_half_up(reduction * 100))

    prescription = Prescription(
        sets=adjusted_sets(ctx.phase.base_sets, ctx.age),
        reps=ctx.phase.rep_range,
        weight_kg=weight,
        rest_seconds=ctx.phase.rest_range,
        rir_target=effort_target(ctx.phase, ctx.config) + BREAK_EXTRA_RIR,
    )
    calculation = (
        f"e1RM {ctx.working_estimate:g}kg − {pct}% = {round_half_up(reduced, 1):g}kg; "
        f"× {ctx.phase.mid_intensity:.0%} = {weight:g}kg"
    )
    logger.debug("%s: returning after %d days, -%d%%", ctx.exercise, days, pct)
    return Recommendation(
        exercise=ctx.exercise,
        prescription=prescription,
        intensity_percent=intensity_percent(weight, ctx.working_estimate, ctx.phase),
        calculated_estimate_kg=round_half_up(max(0.0, ctx.working_estimate), 1),
        training_status="insufficient_data",
        rationale=f"{days} days since last session. Reducing load by {pct}% for safe return.",
        reasoning=build_reasoning(
            "insufficient_data",
            prescription,
            ctx.last_entry,
            calculation,
            days_since_last=days,
        ),
        flags=["returning_from_break"],
    )


def _single_session(ctx: RoutingContext) -> bool:
    return ctx.session_count == 1


def _handle_single_session(ctx: RoutingContext) -> Recommendation:
    modifier = ctx.config.estimate_modifier
    session_date = min(e.date for e in ctx.history)
    session = entries_on(ctx.history, session_date)

    best: WorkoutEntry | None = None
    best_estimate = 0.0
    for entry in session:
        est = entry_estimate(entry, modifier)
        if est > best_estimate:
            best, best_estimate = entry, est

    if best is None:
        logger.debug("%s: no analysable set on %s", ctx.exercise, session_date)
        return benchmark_recommendation(ctx.exercise, ["benchmark_analysis_failed"])

    weight = round_to_increment(best_estimate * ctx.phase.mid_intensity)
    prescription = Prescription(
        sets=adjusted_sets(ctx.phase.base_sets, ctx.age),
        reps=ctx.phase.rep_range,
        weight_kg=weight,
        rest_seconds=ctx.phase.rest_range,
        rir_target=effort_target(ctx.phase, ctx.config),
    )
    calculation = (
        f"Best set {best.weight_kg:g}kg × {best.reps} → e1RM {best_estimate:g}kg; "
        f"× {ctx.phase.mid_intensity:.0%} = {weight:g}kg"
    )
    logger.debug("%s: benchmark baseline %.1fkg from %s", ctx.exercise, best_estimate, session_date)
    return Recommendation(
        exercise=ctx.exercise,
        prescription=prescription,
        intensity_percent=intensity_percent(weight, best_estimate, ctx.phase),
        calculated_estimate_kg=best_estimate,
        training_status="progressive",
        rationale=(
            f"Benchmark analysed: best set {best.weight_kg:g}kg × {best.reps} "
            f"gives an e1RM of {best_estimate:g}kg. First working sets at {weight:g}kg."
        ),
        reasoning=build_reasoning("progressive", prescription, best, calculation),
        flags=["post_benchmark_first_prescription"],
        benchmark_baseline=BenchmarkBaseline(
            estimate_kg=best_estimate,
            best_set=best,
            session_date=session_date,
        ),
    )


Guard = Callable[[RoutingContext], bool]

ROUTES: list[tuple[Guard, Callable[[RoutingContext], Recommendation]]] = [
    (_no_history, _handle_no_history),
    (_long_break, _handle_long_break),
    (_single_session, _handle_single_session),
]


# =============================================================================
# ADJUSTMENTS
# =============================================================================


def _significant_regression(ctx: RoutingContext) -> bool:
    if ctx.previous_estimate <= 0:
        return False
    return ctx.working_estimate < ctx.previous_estimate * (1 - SIGNIFICANT_LOSS_FRACTION)


def _adjust_significant_regression(ctx: RoutingContext) -> None:
    ctx.flags.append("significant_strength_loss_detected")
    if ctx.current_estimate > 0:
        ctx.working_estimate = ctx.current_estimate


def _high_rep_outlier(ctx: RoutingContext) -> bool:
    return ctx.last_entry is not None and ctx.last_entry.reps > HIGH_REP_THRESHOLD


def _adjust_high_rep_outlier(ctx: RoutingContext) -> None:
    ctx.flags.append("high_rep_data_detected_e1rm_estimated")


ADJUSTMENTS: list[tuple[Guard, Callable[[RoutingContext], None]]] = [
    (_significant_regression, _adjust_significant_regression),
    (_high_rep_outlier, _adjust_high_rep_outlier),
]


def route_edge_case(ctx: RoutingContext) -> Recommendation | None:
    """
    Run the terminal routes in order.

    Returns:
        The Recommendation of the first matching route, or None
    """
    for guard, handler in ROUTES:
        if guard(ctx):
            logger.debug("%s: edge case %s", ctx.exercise, guard.__name__.lstrip("_"))
            return handler(ctx)
    return None


def apply_adjustments(ctx: RoutingContext) -> None:
    """Apply every matching adjustment to the context in place."""
    for guard, adjust in ADJUSTMENTS:
        if guard(ctx):
            logger.debug("%s: adjustment %s", ctx.exercise, guard.__name__.lstrip("_"))
            adjust(ctx)
