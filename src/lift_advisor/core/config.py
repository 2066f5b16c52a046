"""
Configuration constants for the recommendation engine.

All adjustable parameters are centralized here for easy tuning.
Exercise-specific values (load increments, e1RM modifiers) live in the
bundled exercises.yaml instead; see core/exercises/.
"""

from dataclasses import dataclass
from typing import Final

# =============================================================================
# e1RM ESTIMATION (Brzycki)
# =============================================================================

BRZYCKI_NUMERATOR: Final[float] = 36.0
BRZYCKI_DENOMINATOR: Final[float] = 37.0
MAX_EFFECTIVE_REPS: Final[int] = 12  # Formula unreliable past ~12 reps
DEFAULT_RIR: Final[int] = 2  # Assumed when reps in reserve was not logged

# =============================================================================
# HISTORY WINDOWS (days ago, inclusive)
# =============================================================================

CURRENT_WINDOW: Final[tuple[int, int]] = (0, 14)
PREVIOUS_WINDOW: Final[tuple[int, int]] = (28, 42)

# =============================================================================
# TREND CLASSIFICATION
# =============================================================================

MIN_SESSIONS_FOR_TREND: Final[int] = 2
LONG_TERM_PROGRESS_PCT: Final[float] = 2.5
LONG_TERM_REGRESS_PCT: Final[float] = -2.5
SHORT_TERM_SESSIONS: Final[int] = 3
SHORT_TERM_PROGRESS_PCT: Final[float] = 1.0
SHORT_TERM_REGRESS_PCT: Final[float] = -2.0

# =============================================================================
# EDGE CASES
# =============================================================================

BREAK_DAYS: Final[int] = 14  # More than this → returning from break
LONG_BREAK_DAYS: Final[int] = 28
BREAK_REDUCTION: Final[float] = 0.10
LONG_BREAK_REDUCTION: Final[float] = 0.15
BREAK_EXTRA_RIR: Final[int] = 1

SIGNIFICANT_LOSS_FRACTION: Final[float] = 0.10
HIGH_REP_THRESHOLD: Final[int] = 15

# =============================================================================
# PLATEAU
# =============================================================================

PLATEAU_SESSIONS: Final[int] = 3
PLATEAU_SPREAD_FRACTION: Final[float] = 0.02
PLATEAU_STRATEGIES: Final[tuple[str, ...]] = (
    "micro_load",
    "add_set",
    "extend_rep_ceiling",
    "reset",
)
REP_CEILING_EXTENSION: Final[int] = 2
RESET_FACTOR: Final[float] = 0.90

# =============================================================================
# PRESCRIPTION
# =============================================================================

WEIGHT_INCREMENT_KG: Final[float] = 1.25  # Smallest loadable step
MIN_SETS: Final[int] = 2

DELOAD_SETS_FACTOR: Final[float] = 0.5
DELOAD_WEIGHT_FACTOR: Final[float] = 0.75
DELOAD_EXTRA_RIR: Final[int] = 2

BASELINE_FRACTION: Final[float] = 0.70  # Conservative start without a usable last set

# (age upper bound, set multiplier); ages above the last bound use AGE_MULTIPLIER_FLOOR
AGE_MULTIPLIERS: Final[list[tuple[int, float]]] = [
    (30, 1.00),
    (40, 0.95),
    (50, 0.85),
    (60, 0.75),
]
AGE_MULTIPLIER_FLOOR: Final[float] = 0.65

# =============================================================================
# BENCHMARK MODE
# =============================================================================

BENCHMARK_SETS: Final[str] = "3-5"
BENCHMARK_REPS: Final[str] = "5-12"
BENCHMARK_REST: Final[str] = "120-180"
BENCHMARK_RIR: Final[int] = 3
BENCHMARK_INSTRUCTIONS: Final[list[str]] = [
    "Warm up with 2 light sets of 8-10 reps.",
    "Choose a load you can move for 5-12 clean reps.",
    "Perform 3-5 working sets, adding weight while the bar speed stays crisp.",
    "Stop each set with about 3 reps left in the tank.",
    "Log every set with weight, reps and reps in reserve.",
]

# =============================================================================
# TRAINING PHASES
# =============================================================================

@dataclass(frozen=True)
class PhaseParams:
    """Prescription parameters for one training phase."""

    intensity_low: float  # Fraction of e1RM
    intensity_high: float
    rep_min: int
    rep_max: int
    base_sets: int
    rir_target: int
    rest_min: int  # Rest in seconds
    rest_max: int

    @property
    def mid_intensity(self) -> float:
        return (self.intensity_low + self.intensity_high) / 2

    @property
    def rep_range(self) -> str:
        return f"{self.rep_min}-{self.rep_max}"

    @property
    def rest_range(self) -> str:
        return f"{self.rest_min}-{self.rest_max}"


DEFAULT_PHASE: Final[str] = "hypertrophy"

PHASE_PARAMS: Final[dict[str, PhaseParams]] = {
    "hypertrophy": PhaseParams(
        intensity_low=0.65,
        intensity_high=0.75,
        rep_min=8,
        rep_max=12,
        base_sets=4,
        rir_target=2,
        rest_min=90,
        rest_max=120,
    ),
    "strength": PhaseParams(
        intensity_low=0.80,
        intensity_high=0.88,
        rep_min=4,
        rep_max=6,
        base_sets=5,
        rir_target=1,
        rest_min=180,
        rest_max=300,
    ),
    "peaking": PhaseParams(
        intensity_low=0.90,
        intensity_high=0.97,
        rep_min=1,
        rep_max=3,
        base_sets=4,
        rir_target=0,
        rest_min=300,
        rest_max=420,
    ),
    "explosive": PhaseParams(
        intensity_low=0.50,
        intensity_high=0.70,
        rep_min=2,
        rep_max=5,
        base_sets=5,
        rir_target=3,
        rest_min=120,
        rest_max=180,
    ),
}


def get_phase_params(phase: str | None) -> PhaseParams:
    """
    Look up phase parameters.

    Unknown or missing phase names fall back to hypertrophy.

    Args:
        phase: Phase name ("hypertrophy", "strength", "peaking", "explosive")

    Returns:
        PhaseParams for the phase
    """
    if phase is None:
        return PHASE_PARAMS[DEFAULT_PHASE]
    return PHASE_PARAMS.get(phase, PHASE_PARAMS[DEFAULT_PHASE])


def age_multiplier(age: int) -> float:
    """
    Set-count multiplier for the lifter's age.

    Recovery capacity declines with age, so older lifters get fewer sets.

    Args:
        age: Age in years

    Returns:
        Multiplier between 0.65 and 1.0
    """
    for upper, multiplier in AGE_MULTIPLIERS:
        if age <= upper:
            return multiplier
    return AGE_MULTIPLIER_FLOOR
