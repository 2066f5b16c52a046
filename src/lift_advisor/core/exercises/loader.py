"""
YAML → ExerciseConfig loader.

Loads the exercise table from the bundled ``src/lift_advisor/exercises.yaml``
and optionally merges user overrides from ``~/.lift-advisor/exercises.yaml``.
A user entry is deep-merged over the bundled one, so only changed keys need
to be listed.  A user entry with no bundled counterpart is added as a new
exercise.

Usage (internal, called by registry.py):
    from .loader import load_exercises_from_yaml
    exercises = load_exercises_from_yaml()
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from .base import ExerciseConfig

_REQUIRED_FIELDS: frozenset[str] = frozenset({"load_increment_kg", "max_weekly_sets"})


def exercise_from_dict(name: str, d: dict) -> ExerciseConfig:
    """Convert a raw dict (from YAML) to an ExerciseConfig.

    Raises ValueError if any required field is absent or a value is out of range.
    """
    if not isinstance(d, dict):
        raise ValueError(f"expected a mapping, got {type(d).__name__}")
    missing = _REQUIRED_FIELDS - set(d)
    if missing:
        raise ValueError(f"ExerciseConfig missing fields: {sorted(missing)}")

    increment = float(d["load_increment_kg"])
    if increment <= 0:
        raise ValueError("load_increment_kg must be positive")

    modifier = d.get("estimate_modifier")
    return ExerciseConfig(
        name=name,
        load_increment_kg=increment,
        max_weekly_sets=int(d["max_weekly_sets"]),
        estimate_modifier=float(modifier) if modifier is not None else None,
        rir_adjustment=int(d.get("rir_adjustment", 0)),
    )


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; raises on parse errors."""
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def get_bundled_yaml_path() -> Path:
    """Return the path to the bundled exercises.yaml."""
    # loader.py lives at src/lift_advisor/core/exercises/loader.py
    return Path(__file__).parent.parent.parent / "exercises.yaml"


def get_user_yaml_path() -> Path | None:
    """Return ~/.lift-advisor/exercises.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".lift-advisor" / "exercises.yaml"
    return p if p.exists() else None


def load_exercises_from_yaml(
    bundled_path: Path | None = None,
    user_path: Path | None = None,
) -> dict[str, ExerciseConfig]:
    """
    Return {exercise name: ExerciseConfig} from the YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/lift_advisor/exercises.yaml
    2. User override at ~/.lift-advisor/exercises.yaml

    A user file that fails to parse, or a user entry that fails validation,
    is skipped with a warning.  Errors in the bundled file propagate.

    Args:
        bundled_path: Override for the bundled file (tests)
        user_path: Override for the user file (tests)

    Returns:
        Mapping of exercise name to config
    """
    if bundled_path is None:
        bundled_path = get_bundled_yaml_path()
    if user_path is None:
        user_path = get_user_yaml_path()

    bundled = _load_yaml_file(bundled_path).get("exercises") or {}
    raw = dict(bundled)

    if user_path is not None:
        try:
            user_raw = _load_yaml_file(user_path).get("exercises") or {}
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(
                f"lift-advisor: ignoring {user_path} ({exc})",
                stacklevel=2,
            )
            user_raw = {}
        if isinstance(user_raw, dict):
            raw = _deep_merge(raw, user_raw)

    result: dict[str, ExerciseConfig] = {}
    for name, entry in raw.items():
        name = str(name)
        try:
            result[name] = exercise_from_dict(name, entry)
        except (TypeError, ValueError) as exc:
            if name in bundled and entry is bundled[name]:
                raise ValueError(f"invalid bundled exercise '{name}': {exc}") from exc
            if name in bundled:
                # Broken user override of a bundled exercise: keep the bundled one
                warnings.warn(
                    f"lift-advisor: ignoring override for '{name}': {exc}",
                    stacklevel=2,
                )
                result[name] = exercise_from_dict(name, bundled[name])
            else:
                warnings.warn(
                    f"lift-advisor: skipping user exercise '{name}': {exc}",
                    stacklevel=2,
                )
    return result
