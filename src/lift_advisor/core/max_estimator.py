"""
Estimated one-rep max (e1RM) from a single logged set.

Brzycki formula with reps-in-reserve folded into the rep count:

    effective_reps = min(reps + RIR, 12)        (RIR defaults to 2)
    e1RM           = weight × 36 / (37 − effective_reps)

The cap at 12 reps keeps the estimate inside the range where the formula
is reasonably accurate; high-rep sets therefore under-report capacity
rather than blowing up as the denominator approaches zero.
"""

from __future__ import annotations

import math

from .config import (
    BRZYCKI_DENOMINATOR,
    BRZYCKI_NUMERATOR,
    DEFAULT_RIR,
    MAX_EFFECTIVE_REPS,
)
from .models import WorkoutEntry


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round half away from zero for non-negative values.

    Python's round() uses banker's rounding (2.5 → 2), which would make
    prescriptions like 60.625 kg round down to 60.0 kg.
    """
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def effective_reps(reps: int, rir: int | None = None) -> int:
    """
    Reps the set represents when taken to failure, capped at 12.

    Args:
        reps: Reps performed
        rir: Reported reps in reserve (None = assume 2)

    Returns:
        Effective rep count
    """
    margin = DEFAULT_RIR if rir is None else rir
    return min(reps + margin, MAX_EFFECTIVE_REPS)


def estimate_1rm(
    weight_kg: float,
    reps: int,
    rir: int | None = None,
    modifier: float | None = None,
) -> float:
    """
    Estimate 1RM using the Brzycki formula.

    Non-positive weight or reps count as "no lift" and return 0.0.

    Args:
        weight_kg: Load lifted
        reps: Reps performed
        rir: Reps in reserve (None = assume 2)
        modifier: Exercise-specific multiplier (e.g. 0.82 for front squat)

    Returns:
        Estimated 1RM in kg, rounded to one decimal
    """
    if weight_kg <= 0 or reps <= 0:
        return 0.0

    raw = weight_kg * BRZYCKI_NUMERATOR / (BRZYCKI_DENOMINATOR - effective_reps(reps, rir))
    if modifier:
        raw *= modifier
    return round_half_up(max(0.0, raw), 1)


def entry_estimate(entry: WorkoutEntry, modifier: float | None = None) -> float:
    """Estimate 1RM for a logged entry."""
    return estimate_1rm(entry.weight_kg, entry.reps, entry.rir, modifier)
