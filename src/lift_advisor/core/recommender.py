"""
Recommendation orchestration.

generate_recommendation() is the single entry point of the engine:

1. Filter the history snapshot to active entries of one exercise
2. Aggregate: windowed e1RMs, session count, recency
3. Route edge cases (benchmark, break, first session) or apply adjustments
4. Classify the trend and build the prescription
5. Attach the reasoning breakdown

The function is pure: "today" is a parameter and nothing is cached or
persisted, so identical inputs always give identical output.
"""

import logging
from datetime import date

from .adaptation import classify_trend, short_term_change
from .config import CURRENT_WINDOW, PREVIOUS_WINDOW, get_phase_params
from .edge_cases import RoutingContext, apply_adjustments, route_edge_case
from .exercises import get_exercise_config
from .explain import build_reasoning
from .max_estimator import entry_estimate, round_half_up
from .metrics import (
    active_entries,
    days_since_last_session,
    highest_estimate_in_range,
    most_recent_entry,
    session_count,
)
from .models import Recommendation, WorkoutEntry
from .prescription import build_prescription

logger = logging.getLogger(__name__)


def _dedupe(flags: list[str]) -> list[str]:
    return list(dict.fromkeys(flags))


def build_context(
    exercise: str,
    history: list[WorkoutEntry],
    age: int,
    phase: str | None = None,
    today: date | None = None,
) -> RoutingContext:
    """
    Aggregate a history snapshot into a routing context.

    Args:
        exercise: Exercise name (unknown names use the default config)
        history: Workout entries of any exercise, active or not
        age: Age in years
        phase: Phase name (unknown names fall back to hypertrophy)
        today: Reference date (defaults to date.today())

    Returns:
        RoutingContext for this exercise
    """
    if today is None:
        today = date.today()

    config = get_exercise_config(exercise)
    modifier = config.estimate_modifier
    entries = active_entries([e for e in history if e.exercise_name == exercise])

    current = highest_estimate_in_range(entries, *CURRENT_WINDOW, today, modifier)
    previous = highest_estimate_in_range(entries, *PREVIOUS_WINDOW, today, modifier)
    last = most_recent_entry(entries, modifier)

    working = current
    if working <= 0 and last is not None:
        working = entry_estimate(last, modifier)

    return RoutingContext(
        exercise=exercise,
        history=entries,
        today=today,
        age=age,
        phase=get_phase_params(phase),
        config=config,
        session_count=session_count(entries),
        days_since_last=days_since_last_session(entries, today),
        last_entry=last,
        current_estimate=current,
        previous_estimate=previous,
        working_estimate=working,
    )


def generate_recommendation(
    exercise: str,
    history: list[WorkoutEntry],
    age: int,
    phase: str | None = "hypertrophy",
    today: date | None = None,
) -> Recommendation:
    """
    Recommend the next session for one exercise.

    Args:
        exercise: Exercise name
        history: Workout entries (other exercises and inactive entries are ignored)
        age: Age in years
        phase: "hypertrophy", "strength", "peaking" or "explosive"
        today: Reference date (defaults to date.today())

    Returns:
        Recommendation
    """
    ctx = build_context(exercise, history, age, phase, today)
    logger.debug(
        "%s: %d active entries, %d sessions, current=%.1f previous=%.1f",
        exercise,
        len(ctx.history),
        ctx.session_count,
        ctx.current_estimate,
        ctx.previous_estimate,
    )

    routed = route_edge_case(ctx)
    if routed is not None:
        return routed

    apply_adjustments(ctx)

    status = classify_trend(
        ctx.current_estimate, ctx.previous_estimate, ctx.session_count, ctx.history
    )
    logger.debug("%s: status %s", exercise, status)

    decision = build_prescription(
        status,
        ctx.last_entry,
        ctx.working_estimate,
        ctx.history,
        ctx.phase,
        ctx.config,
        ctx.age,
    )
    if decision.plateau_strategy:
        logger.debug("%s: plateau strategy %s", exercise, decision.plateau_strategy)

    reasoning = build_reasoning(
        status,
        decision.prescription,
        ctx.last_entry,
        decision.calculation,
        current_estimate=ctx.current_estimate,
        previous_estimate=ctx.previous_estimate,
        recent_change=short_term_change(ctx.history, ctx.config.estimate_modifier),
        days_since_last=ctx.days_since_last,
    )

    return Recommendation(
        exercise=exercise,
        prescription=decision.prescription,
        intensity_percent=decision.intensity_percent,
        calculated_estimate_kg=round_half_up(max(0.0, ctx.working_estimate), 1),
        training_status=status,
        rationale=decision.rationale,
        reasoning=reasoning,
        flags=_dedupe(ctx.flags + decision.flags),
        plateau_strategy=decision.plateau_strategy,
    )
