"""
Adaptation rules: trend classification, plateau detection, and plateau
strategy rotation.

Determines whether the lifter is progressing, stuck, or going backwards,
and which remediation tactic to try when they are stuck.
"""

from .config import (
    LONG_TERM_PROGRESS_PCT,
    LONG_TERM_REGRESS_PCT,
    MIN_SESSIONS_FOR_TREND,
    PLATEAU_SESSIONS,
    PLATEAU_SPREAD_FRACTION,
    PLATEAU_STRATEGIES,
    SHORT_TERM_PROGRESS_PCT,
    SHORT_TERM_REGRESS_PCT,
    SHORT_TERM_SESSIONS,
)
from .metrics import active_entries, count_at_weight, session_bests
from .models import TrainingStatus, WorkoutEntry


def percent_change(current: float, previous: float) -> float:
    """
    Relative change in percent.

    Multiplies before dividing so boundary values such as 97.5 vs 100
    land exactly on -2.5.
    """
    if previous <= 0:
        return 0.0
    return round((current - previous) * 100 / previous, 6)


def short_term_change(
    recent_history: list[WorkoutEntry],
    modifier: float | None = None,
) -> float | None:
    """
    Percent change from the earliest to the latest of the last 3 sessions.

    Each session is scored by its best set, so back-off sets logged on the
    same day do not count as a drop.

    Args:
        recent_history: Workout entries (inactive ones are ignored)
        modifier: Exercise e1RM modifier

    Returns:
        Percent change, or None with fewer than 2 active entries
    """
    if len(active_entries(recent_history)) < 2:
        return None

    window = session_bests(recent_history, modifier)[-SHORT_TERM_SESSIONS:]
    first = window[0][1]
    last = window[-1][1]
    if first <= 0:
        return None
    return percent_change(last, first)


def classify_trend(
    current_estimate: float,
    previous_estimate: float,
    session_count: int,
    recent_history: list[WorkoutEntry],
) -> TrainingStatus:
    """
    Classify the training trend.

    Long-term: compare the best e1RM of the last 14 days with the best of
    28-42 days ago (±2.5% bands).  Without a 4-6 week old entry, fall back
    to the short-term trend over the last 3 sessions (+1% / -2% bands) so
    new lifters are not stuck at "insufficient_data".

    Args:
        current_estimate: Highest e1RM of the last 14 days
        previous_estimate: Highest e1RM 28-42 days ago (0 if none)
        session_count: Distinct session dates in history
        recent_history: Entries used for the short-term fallback

    Returns:
        "progressing", "plateau", "regressing" or "insufficient_data"
    """
    if session_count < MIN_SESSIONS_FOR_TREND:
        return "insufficient_data"

    if previous_estimate > 0:
        change = percent_change(current_estimate, previous_estimate)
        if change >= LONG_TERM_PROGRESS_PCT:
            return "progressing"
        if change <= LONG_TERM_REGRESS_PCT:
            return "regressing"
        return "plateau"

    change = short_term_change(recent_history)
    if change is None:
        return "insufficient_data"
    if change > SHORT_TERM_PROGRESS_PCT:
        return "progressing"
    if change < SHORT_TERM_REGRESS_PCT:
        return "regressing"
    return "plateau"


def is_plateau(history: list[WorkoutEntry], modifier: float | None = None) -> bool:
    """
    Detect a genuine performance plateau.

    Plateau = at least 3 session dates AND the best e1RM of each of the
    last 3 sessions spreads by less than 2% of the weakest one.

    Args:
        history: Workout entries
        modifier: Exercise e1RM modifier

    Returns:
        True if plateau detected
    """
    bests = session_bests(history, modifier)
    if len(bests) < PLATEAU_SESSIONS:
        return False

    recent = [est for _, est in bests[-PLATEAU_SESSIONS:]]
    worst = min(recent)
    if worst <= 0:
        return False
    return (max(recent) - worst) / worst < PLATEAU_SPREAD_FRACTION


def select_plateau_strategy(history: list[WorkoutEntry], current_weight_kg: float) -> str:
    """
    Pick the next plateau tactic by round-robin.

    The index is the number of active entries at the current weight, so
    every additional session at the same load moves on to the next tactic.

    Args:
        history: Workout entries
        current_weight_kg: Last working weight

    Returns:
        One of "micro_load", "add_set", "extend_rep_ceiling", "reset"
    """
    index = count_at_weight(history, current_weight_kg) % len(PLATEAU_STRATEGIES)
    return PLATEAU_STRATEGIES[index]
