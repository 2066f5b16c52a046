"""
Exercise registry.

All configured exercises are registered here.  Use get_exercise_config()
to look up an ExerciseConfig by exercise name; unknown names resolve to
the "_default" entry, so the lookup never fails.

The table is loaded from the bundled ``exercises.yaml`` at import time.
If the bundled file is missing or invalid, a RuntimeError is raised; the
application cannot start without a valid exercise table.

User overrides: ``~/.lift-advisor/exercises.yaml``.
"""

import yaml

from .base import DEFAULT_EXERCISE_KEY, ExerciseConfig

# Used when the YAML table has no "_default" entry
FALLBACK_DEFAULT = ExerciseConfig(
    name=DEFAULT_EXERCISE_KEY,
    load_increment_kg=2.5,
    max_weekly_sets=16,
)


def _build_registry() -> dict[str, ExerciseConfig]:
    from .loader import load_exercises_from_yaml

    try:
        loaded = load_exercises_from_yaml()
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise RuntimeError(
            f"lift-advisor: exercise table could not be loaded ({exc}). "
            "Check that src/lift_advisor/exercises.yaml is present and valid."
        ) from exc
    loaded.setdefault(DEFAULT_EXERCISE_KEY, FALLBACK_DEFAULT)
    return loaded


EXERCISE_REGISTRY: dict[str, ExerciseConfig] = _build_registry()


def get_exercise_config(exercise_name: str) -> ExerciseConfig:
    """
    Return the ExerciseConfig for the given exercise name.

    Args:
        exercise_name: Exercise name as logged, e.g. "Squat"

    Returns:
        ExerciseConfig for the exercise, or the default entry if unknown
    """
    return EXERCISE_REGISTRY.get(exercise_name, EXERCISE_REGISTRY[DEFAULT_EXERCISE_KEY])

