"""
Pure history aggregation functions.

All functions only consider active entries (``active=True``); excluded
entries stay in the snapshot but never influence a recommendation.
"today" is always passed in explicitly so results are reproducible.
"""

from datetime import date

from .max_estimator import entry_estimate
from .models import WorkoutEntry


def active_entries(history: list[WorkoutEntry]) -> list[WorkoutEntry]:
    """
    Filter history to active entries.

    Args:
        history: Workout entries (may include excluded ones)

    Returns:
        Active entries in their original order
    """
    return [e for e in history if e.active]


def chronological(history: list[WorkoutEntry]) -> list[WorkoutEntry]:
    """Active entries sorted by date (stable for same-day entries)."""
    return sorted(active_entries(history), key=lambda e: e.date)


def highest_estimate_in_range(
    history: list[WorkoutEntry],
    days_ago_start: int,
    days_ago_end: int,
    today: date,
    modifier: float | None = None,
) -> float:
    """
    Highest e1RM among active entries inside a day-offset window.

    The window is inclusive on both ends and counted back from today, so
    (0, 14) covers the last two weeks and (28, 42) four to six weeks ago.

    Args:
        history: Workout entries
        days_ago_start: Nearer edge of the window (days ago)
        days_ago_end: Farther edge of the window (days ago)
        today: Reference date
        modifier: Exercise e1RM modifier

    Returns:
        Highest estimate in the window, or 0.0 if no entry falls inside
    """
    low, high = sorted((days_ago_start, days_ago_end))
    in_range = [
        e for e in active_entries(history) if low <= (today - e.day).days <= high
    ]
    if not in_range:
        return 0.0
    return max(entry_estimate(e, modifier) for e in in_range)


def most_recent_entry(
    history: list[WorkoutEntry],
    modifier: float | None = None,
) -> WorkoutEntry | None:
    """
    Active entry with the latest date.

    Same-day ties go to the entry with the highest estimate; if that ties
    too, the first one in input order wins.

    Args:
        history: Workout entries
        modifier: Exercise e1RM modifier

    Returns:
        Latest active entry or None if there is none
    """
    active = active_entries(history)
    if not active:
        return None

    latest_date = max(e.date for e in active)
    same_day = [e for e in active if e.date == latest_date]
    return max(same_day, key=lambda e: entry_estimate(e, modifier))


def session_count(history: list[WorkoutEntry]) -> int:
    """Number of distinct training dates among active entries."""
    return len({e.date for e in active_entries(history)})


def days_since_last_session(history: list[WorkoutEntry], today: date) -> int | None:
    """
    Whole days between today and the most recent active entry.

    Args:
        history: Workout entries
        today: Reference date

    Returns:
        Day gap, or None if there is no active history
    """
    latest = most_recent_entry(history)
    if latest is None:
        return None
    return (today - latest.day).days


def entries_on(history: list[WorkoutEntry], date_str: str) -> list[WorkoutEntry]:
    """Active entries logged on one date."""
    return [e for e in active_entries(history) if e.date == date_str]


def session_bests(
    history: list[WorkoutEntry],
    modifier: float | None = None,
) -> list[tuple[str, float]]:
    """
    Best e1RM per session date.

    Args:
        history: Workout entries
        modifier: Exercise e1RM modifier

    Returns:
        (date, best estimate) pairs, oldest first
    """
    bests: dict[str, float] = {}
    for e in active_entries(history):
        est = entry_estimate(e, modifier)
        if e.date not in bests or est > bests[e.date]:
            bests[e.date] = est
    return sorted(bests.items())


def count_at_weight(history: list[WorkoutEntry], weight_kg: float) -> int:
    """Number of active entries logged at exactly this weight."""
    return sum(1 for e in active_entries(history) if e.weight_kg == weight_kg)
