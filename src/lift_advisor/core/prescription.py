"""
Prescription building: double progression per training phase.

Turns a training status plus the last logged set into concrete numbers
for the next session.  Work within the phase rep range at a fixed load;
once the top of the range is reached at (or below) the target effort,
add the exercise's load increment and drop back to the bottom of the range.
"""

from dataclasses import dataclass, field

from .adaptation import is_plateau, select_plateau_strategy
from .config import (
    BASELINE_FRACTION,
    DELOAD_EXTRA_RIR,
    DELOAD_SETS_FACTOR,
    DELOAD_WEIGHT_FACTOR,
    MIN_SETS,
    REP_CEILING_EXTENSION,
    RESET_FACTOR,
    WEIGHT_INCREMENT_KG,
    PhaseParams,
    age_multiplier,
)
from .exercises.base import ExerciseConfig
from .max_estimator import round_half_up
from .models import Prescription, TrainingStatus, WorkoutEntry


@dataclass
class PrescriptionDecision:
    """
    A prescription plus everything needed to explain it.

    ``calculation`` describes how the weight was derived; it feeds the
    reasoning breakdown so the explanation cannot drift from the numbers.
    """

    prescription: Prescription
    intensity_percent: int | None
    rationale: str
    calculation: str
    flags: list[str] = field(default_factory=list)
    plateau_strategy: str | None = None


def round_to_increment(weight_kg: float) -> float:
    """
    Round a load to the nearest 1.25 kg (halves round up).

    Args:
        weight_kg: Raw load

    Returns:
        Loadable weight, never negative
    """
    if weight_kg <= 0:
        return 0.0
    return round_half_up(weight_kg / WEIGHT_INCREMENT_KG) * WEIGHT_INCREMENT_KG


def adjusted_sets(base_sets: int, age: int) -> int:
    """
    Scale the phase set count for age.

    sets = max(2, round(base_sets × age_multiplier(age)))

    Args:
        base_sets: Phase base set count
        age: Age in years

    Returns:
        Adjusted set count (minimum 2)
    """
    return max(MIN_SETS, int(round_half_up(base_sets * age_multiplier(age))))


def effort_target(phase: PhaseParams, exercise: ExerciseConfig) -> int:
    """Reps-in-reserve target: phase target plus the exercise adjustment."""
    return phase.rir_target + exercise.rir_adjustment


def intensity_percent(weight_kg: float | None, estimate_kg: float, phase: PhaseParams) -> int:
    """
    Prescribed weight as a percentage of the e1RM.

    Falls back to the phase mid-intensity when there is no estimate.
    """
    if weight_kg and estimate_kg > 0:
        return int(round_half_up(weight_kg / estimate_kg * 100))
    return int(round_half_up(phase.mid_intensity * 100))


def _fmt_kg(weight_kg: float) -> str:
    return f"{weight_kg:g}kg"


def _progress_from(
    last: WorkoutEntry,
    phase: PhaseParams,
    exercise: ExerciseConfig,
) -> tuple[float, int, bool, str, str]:
    """
    Double progression against the last logged set.

    Returns:
        (weight, target reps, load increased, rationale, calculation)
    """
    hit_top = last.reps >= phase.rep_max
    effort_ok = last.rir is None or last.rir <= phase.rir_target

    if hit_top and effort_ok:
        inc = exercise.load_increment_kg
        weight = round_to_increment(last.weight_kg + inc)
        rir_txt = last.rir if last.rir is not None else "~2"
        return (
            weight,
            phase.rep_min,
            True,
            f"Hit {last.reps} reps at RIR {rir_txt}. Increasing load by {inc:g}kg.",
            f"Last working weight {_fmt_kg(last.weight_kg)} + {inc:g}kg increment = {_fmt_kg(weight)}",
        )

    weight = round_to_increment(last.weight_kg)
    calc = f"Holding last working weight {_fmt_kg(weight)}"
    target = min(last.reps + 1, phase.rep_max)
    return (
        weight,
        target,
        False,
        f"Stay at {_fmt_kg(weight)} and aim for {target} reps per set.",
        calc,
    )


def _apply_plateau_strategy(
    strategy: str,
    last: WorkoutEntry,
    phase: PhaseParams,
    exercise: ExerciseConfig,
    sets: int,
) -> tuple[float, int, int, str | None, str, str]:
    """
    Numbers for one plateau tactic.

    Returns:
        (weight, sets, target reps, rep range override, rationale, calculation)
    """
    held = round_to_increment(last.weight_kg)

    if strategy == "micro_load":
        weight = round_to_increment(last.weight_kg + exercise.micro_increment_kg)
        step = round_half_up(weight - last.weight_kg, 3)
        return (
            weight,
            sets,
            phase.rep_min,
            None,
            f"Plateau detected. Applying micro-load: +{step:g}kg.",
            f"Last working weight {_fmt_kg(last.weight_kg)} + {exercise.micro_increment_kg:g}kg "
            f"half increment, rounded to {_fmt_kg(weight)} (+{step:g}kg)",
        )

    if strategy == "add_set":
        extra = max(sets, min(sets + 1, exercise.max_weekly_sets))
        if extra == sets:
            rationale = (
                f"Plateau detected. Already at {sets} sets, the cap for this lift; "
                "holding volume and pushing for one more rep."
            )
            calc = f"Holding {_fmt_kg(held)}; sets stay at {sets} (cap {exercise.max_weekly_sets})"
        else:
            rationale = f"Plateau detected. Adding 1 set ({extra} total) to increase volume."
            calc = f"Holding {_fmt_kg(held)}; sets {sets} + 1 = {extra}"
        return (
            held,
            extra,
            min(last.reps + 1, phase.rep_max),
            None,
            rationale,
            calc,
        )

    if strategy == "extend_rep_ceiling":
        ceiling = phase.rep_max + REP_CEILING_EXTENSION
        return (
            held,
            sets,
            ceiling,
            f"{phase.rep_min}-{ceiling}",
            f"Plateau detected. Extending rep ceiling by {REP_CEILING_EXTENSION}. Aim for {ceiling} reps.",
            f"Holding {_fmt_kg(held)}; rep ceiling {phase.rep_max} + {REP_CEILING_EXTENSION} = {ceiling}",
        )

    weight = round_to_increment(last.weight_kg * RESET_FACTOR)
    return (
        weight,
        sets,
        phase.rep_max,
        None,
        "Plateau detected. Resetting: reduce weight 10%, rebuild.",
        f"Last working weight {_fmt_kg(last.weight_kg)} × {RESET_FACTOR:g} = {_fmt_kg(weight)}",
    )


def build_prescription(
    status: TrainingStatus,
    last_entry: WorkoutEntry | None,
    working_estimate: float,
    history: list[WorkoutEntry],
    phase: PhaseParams,
    exercise: ExerciseConfig,
    age: int,
) -> PrescriptionDecision:
    """
    Build the next-session prescription for a classified training status.

    Args:
        status: "progressing", "plateau", "regressing" or "insufficient_data"
        last_entry: Most recent active entry (None if unusable)
        working_estimate: Working e1RM (modifier already applied)
        history: Active entries for the exercise (plateau detection)
        phase: Phase parameters
        exercise: Exercise configuration
        age: Age in years

    Returns:
        PrescriptionDecision with numbers, flags and explanation inputs
    """
    sets = adjusted_sets(phase.base_sets, age)
    rir = effort_target(phase, exercise)
    flags: list[str] = []
    strategy: str | None = None
    reps: int | str = phase.rep_range
    target: int | None = None

    usable_last = last_entry is not None and last_entry.weight_kg > 0 and last_entry.reps > 0

    if status == "regressing":
        deload_sets = max(MIN_SETS, int(round_half_up(sets * DELOAD_SETS_FACTOR)))
        base = (
            last_entry.weight_kg
            if usable_last
            else round_to_increment(working_estimate * phase.mid_intensity)
        )
        weight = round_to_increment(base * DELOAD_WEIGHT_FACTOR)
        return PrescriptionDecision(
            prescription=Prescription(
                sets=deload_sets,
                reps=phase.rep_range,
                weight_kg=weight,
                rest_seconds=phase.rest_range,
                rir_target=rir + DELOAD_EXTRA_RIR,
            ),
            intensity_percent=intensity_percent(weight, working_estimate, phase),
            rationale="Performance declining. Deload recommended.",
            calculation=(
                f"{_fmt_kg(base)} × {DELOAD_WEIGHT_FACTOR:g} = {_fmt_kg(weight)}; "
                f"sets halved {sets} → {deload_sets}"
            ),
            flags=["recovery_week_recommended"],
        )

    if status == "progressing" and usable_last:
        weight, target, increased, rationale, calc = _progress_from(last_entry, phase, exercise)
        if not increased:
            rationale = f"Progress continues. {rationale}"

    elif status == "plateau" and usable_last:
        if is_plateau(history, exercise.estimate_modifier):
            strategy = select_plateau_strategy(history, last_entry.weight_kg)
            weight, sets, target, range_override, rationale, calc = _apply_plateau_strategy(
                strategy, last_entry, phase, exercise, sets
            )
            if range_override is not None:
                reps = range_override
            flags.append("plateau_strategy_applied")
        else:
            weight, target, _, rationale, calc = _progress_from(last_entry, phase, exercise)
            rationale = f"Stable performance. Push for more reps to break through. {rationale}"

    elif usable_last:
        # insufficient_data with a real last set: keep early sessions moving
        weight, target, _, rationale, calc = _progress_from(last_entry, phase, exercise)
        rationale = f"Building on your most recent session. {rationale}"
        flags.append("progressive_loading_from_recent_session")

    else:
        weight = round_to_increment(working_estimate * BASELINE_FRACTION)
        target = None
        rationale = "Establishing baseline at conservative load."
        calc = f"{BASELINE_FRACTION:.0%} of e1RM {working_estimate:g}kg = {_fmt_kg(weight)}"
        flags.append("baseline_establishment_phase")

    return PrescriptionDecision(
        prescription=Prescription(
            sets=sets,
            reps=reps,
            weight_kg=weight,
            rest_seconds=phase.rest_range,
            rir_target=rir,
            target_reps=target,
        ),
        intensity_percent=intensity_percent(weight, working_estimate, phase),
        rationale=rationale,
        calculation=calc,
        flags=flags,
        plateau_strategy=strategy,
    )
