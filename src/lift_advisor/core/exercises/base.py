"""
Base type for exercise configuration.

ExerciseConfig parameterises the shared recommendation engine for one
exercise: how much load to add per progression step, the weekly set cap,
and optional e1RM / effort adjustments for awkward variants.
"""

from dataclasses import dataclass

DEFAULT_EXERCISE_KEY = "_default"


@dataclass(frozen=True)
class ExerciseConfig:
    """Configuration for one exercise."""

    name: str                            # e.g. "Squat", or "_default"
    load_increment_kg: float             # Added per progression step
    max_weekly_sets: int
    estimate_modifier: float | None = None  # Multiplies raw e1RM (e.g. 0.82 front squat)
    rir_adjustment: int = 0              # Extra reps in reserve on top of the phase target

    @property
    def micro_increment_kg(self) -> float:
        """Half step used by the micro-load plateau tactic."""
        return self.load_increment_kg / 2
