"""
Adapter from Recommendation to the simplified legacy contract.

Older call sites only understand a progress / maintain / deload status and
a single target rep count.  The rich fields are passed through untouched.
"""

import re

from .models import (
    LegacyNextWorkout,
    LegacyPerformance,
    LegacyRecommendation,
    LegacyStatus,
    Recommendation,
)

DEFAULT_TARGET_REPS = 8

_STATUS_MAP: dict[str, LegacyStatus] = {
    "progressing": "progress",
    "plateau": "maintain",
    "regressing": "deload",
    "insufficient_data": "maintain",
}

_RANGE_RE = re.compile(r"(\d+)-(\d+)")


def _lower_bound(value: int | str, default: int) -> int:
    """Lower bound of an "a-b" range string, the int itself, or default."""
    if isinstance(value, int):
        return value
    match = _RANGE_RE.search(value)
    if match:
        return int(match.group(1))
    return int(value) if value.strip().isdigit() else default


def legacy_status(rec: Recommendation) -> LegacyStatus:
    """Map the training status; a recovery week always reads as deload."""
    if rec.has_flag("recovery_week_recommended"):
        return "deload"
    return _STATUS_MAP.get(rec.training_status, "maintain")


def to_legacy(rec: Recommendation | None) -> LegacyRecommendation | None:
    """
    Convert a Recommendation to the legacy shape.

    Target reps come from the explicit target, else the bottom of the rep
    range, else the numeric rep count, else 8.

    Args:
        rec: Recommendation (or None)

    Returns:
        LegacyRecommendation, or None when rec is None
    """
    if rec is None:
        return None

    p = rec.prescription
    if p.target_reps is not None:
        target = p.target_reps
    else:
        target = _lower_bound(p.reps, DEFAULT_TARGET_REPS)
    sets = _lower_bound(p.sets, 0)

    return LegacyRecommendation(
        exercise_name=rec.exercise,
        current_performance=LegacyPerformance(
            weight=p.weight_kg,
            reps=target,
            sets=sets,
            total_reps=target * sets,
        ),
        next_workout=LegacyNextWorkout(weight=p.weight_kg, target_reps=target, sets=sets),
        status=legacy_status(rec),
        message=rec.rationale,
        plateau_detected=rec.has_flag("plateau_strategy_applied"),
        deload_recommended=rec.has_flag("recovery_week_recommended"),
        intensity_percent=rec.intensity_percent,
        calculated_estimate_kg=rec.calculated_estimate_kg,
        training_status=rec.training_status,
        flags=list(rec.flags),
        prescription=p,
    )
