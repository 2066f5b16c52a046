"""
Reasoning breakdown for a recommendation.

Every field is derived from values the engine already computed for the
prescription; nothing here feeds back into the numbers.
"""

from .config import BREAK_DAYS, SHORT_TERM_PROGRESS_PCT, SHORT_TERM_REGRESS_PCT
from .models import Prescription, ReasoningBreakdown, TrainingStatus, WorkoutEntry


def _describe_set(entry: WorkoutEntry | None) -> str:
    if entry is None:
        return "No previous session logged."
    rir = f" @ RIR {entry.rir}" if entry.rir is not None else ""
    sets = f" for {entry.sets_logged} sets" if entry.sets_logged else ""
    return f"{entry.date}: {entry.weight_kg:g}kg × {entry.reps}{rir}{sets}"


def _describe_trend(
    status: TrainingStatus,
    current_estimate: float,
    previous_estimate: float,
    recent_change: float | None,
    days_since_last: int | None,
) -> str:
    if status == "benchmark_mode":
        return "No data yet. This session establishes your starting point."
    if days_since_last is not None and days_since_last > BREAK_DAYS:
        return f"{days_since_last} days since your last session; strength is assumed to have dipped."
    if status == "progressive":
        return "First session analysed. Progression starts from its best set."

    if previous_estimate > 0 and current_estimate > 0:
        change = (current_estimate - previous_estimate) * 100 / previous_estimate
        return (
            f"e1RM {current_estimate:g}kg vs {previous_estimate:g}kg 4 weeks ago "
            f"({change:+.1f}%)."
        )
    if recent_change is not None:
        if recent_change > SHORT_TERM_PROGRESS_PCT:
            word = "trending up"
        elif recent_change < SHORT_TERM_REGRESS_PCT:
            word = "trending down"
        else:
            word = "holding steady"
        return f"Over your last sessions e1RM is {word} ({recent_change:+.1f}%)."
    return "Not enough sessions yet to judge a trend."


def _describe_next_step(prescription: Prescription) -> str:
    if prescription.weight_kg is None:
        return (
            f"Benchmark: {prescription.sets} sets of {prescription.reps} reps, "
            f"stopping around RIR {prescription.rir_target}."
        )
    reps = prescription.target_reps if prescription.target_reps is not None else prescription.reps
    return (
        f"{prescription.sets} sets × {reps} reps at {prescription.weight_kg:g}kg, "
        f"RIR {prescription.rir_target}, rest {prescription.rest_seconds}s."
    )


def build_reasoning(
    status: TrainingStatus,
    prescription: Prescription,
    last_entry: WorkoutEntry | None,
    calculation: str,
    current_estimate: float = 0.0,
    previous_estimate: float = 0.0,
    recent_change: float | None = None,
    days_since_last: int | None = None,
) -> ReasoningBreakdown:
    """
    Explain a recommendation in four short texts.

    Args:
        status: Training status of the recommendation
        prescription: The prescription being explained
        last_entry: Most recent active entry (None in benchmark mode)
        calculation: How the prescribed weight was derived
        current_estimate: Best e1RM of the last 14 days
        previous_estimate: Best e1RM 28-42 days ago
        recent_change: Short-term percent change, if known
        days_since_last: Days since the last session, if any

    Returns:
        ReasoningBreakdown
    """
    return ReasoningBreakdown(
        last_session=_describe_set(last_entry),
        trend=_describe_trend(
            status, current_estimate, previous_estimate, recent_change, days_since_last
        ),
        next_step=_describe_next_step(prescription),
        calculation=calculation,
    )
