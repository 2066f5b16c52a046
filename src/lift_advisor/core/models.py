"""
Data models for lift-advisor.

Dataclasses for logged workout entries, the user profile, and the
recommendation the engine produces.  Entries are read-only to the engine;
ownership of mutation lives with the history store.
"""

from dataclasses import dataclass, field
from datetime import date as Date
from datetime import datetime
from typing import Literal

TrainingStatus = Literal[
    "progressing",
    "plateau",
    "regressing",
    "insufficient_data",
    "benchmark_mode",
    "progressive",
]
LegacyStatus = Literal["progress", "maintain", "deload"]

TRAINING_STATUSES: tuple[str, ...] = (
    "progressing",
    "plateau",
    "regressing",
    "insufficient_data",
    "benchmark_mode",
    "progressive",
)


def parse_date(date_str: str) -> Date:
    """Parse an ISO YYYY-MM-DD string into a date."""
    return datetime.strptime(date_str, "%Y-%m-%d").date()


@dataclass
class WorkoutEntry:
    """
    One logged exercise entry.

    weight_kg and reps are not validated here: the engine treats
    non-positive values as "no lift" instead of failing.
    """

    id: str
    exercise_name: str
    date: str  # ISO format: YYYY-MM-DD
    weight_kg: float
    reps: int
    sets_logged: int | None = None
    rir: int | None = None  # reps in reserve reported for the set
    active: bool = True

    def __post_init__(self) -> None:
        """Validate entry date."""
        self._validate_date(self.date)

    @staticmethod
    def _validate_date(date_str: str) -> None:
        """Validate date string is ISO format YYYY-MM-DD."""
        import re

        if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
            raise ValueError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

        try:
            parse_date(date_str)
        except ValueError as e:
            raise ValueError(f"Invalid date: {date_str}") from e

    @property
    def day(self) -> Date:
        return parse_date(self.date)


@dataclass
class UserProfile:
    """
    Lifter profile used as the default age/phase for recommendations.
    """

    age: int
    phase: str = "hypertrophy"

    def __post_init__(self) -> None:
        """Validate profile data."""
        from .config import PHASE_PARAMS

        if self.age <= 0:
            raise ValueError("age must be positive")

        if self.phase not in PHASE_PARAMS:
            raise ValueError(
                f"Invalid phase: {self.phase!r}. Must be one of {', '.join(PHASE_PARAMS)}"
            )


@dataclass
class Prescription:
    """
    Next-session prescription.

    sets and reps are strings ("3-5", "8-12") for ranges and ints for
    specific numbers.  weight_kg is None only in benchmark mode.
    """

    sets: int | str
    reps: int | str
    weight_kg: float | None
    rest_seconds: str
    rir_target: int
    target_reps: int | None = None
    benchmark_instructions: list[str] | None = None


@dataclass
class BenchmarkBaseline:
    """Best set of the first completed session, used as the starting e1RM."""

    estimate_kg: float
    best_set: WorkoutEntry
    session_date: str


@dataclass
class ReasoningBreakdown:
    """Plain-text explanation of a recommendation."""

    last_session: str
    trend: str
    next_step: str
    calculation: str


@dataclass
class Recommendation:
    """
    Engine output for one exercise.

    Recomputed on every call from the current history snapshot; never stored.
    """

    exercise: str
    prescription: Prescription
    intensity_percent: int | None
    calculated_estimate_kg: float
    training_status: TrainingStatus
    rationale: str
    reasoning: ReasoningBreakdown
    flags: list[str] = field(default_factory=list)
    benchmark_mode: bool = False
    benchmark_baseline: BenchmarkBaseline | None = None
    plateau_strategy: str | None = None

    def __post_init__(self) -> None:
        if self.training_status not in TRAINING_STATUSES:
            raise ValueError(f"Invalid training_status: {self.training_status}")
        if self.calculated_estimate_kg < 0:
            raise ValueError("calculated_estimate_kg must be non-negative")

    def has_flag(self, flag: str) -> bool:
        return flag in self.flags


@dataclass
class LegacyPerformance:
    """Performance block of the simplified contract."""

    weight: float | None
    reps: int
    sets: int
    total_reps: int


@dataclass
class LegacyNextWorkout:
    weight: float | None
    target_reps: int
    sets: int


@dataclass
class LegacyRecommendation:
    """
    Simplified recommendation shape for older call sites.

    Carries the rich fields through unchanged so newer UI code can use them.
    """

    exercise_name: str
    current_performance: LegacyPerformance
    next_workout: LegacyNextWorkout
    status: LegacyStatus
    message: str
    plateau_detected: bool
    deload_recommended: bool
    intensity_percent: int | None
    calculated_estimate_kg: float
    training_status: TrainingStatus
    flags: list[str]
    prescription: Prescription
