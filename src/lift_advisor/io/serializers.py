"""
JSON serialization for lift-advisor data models.

Handles conversion between dataclasses and JSON-compatible dicts, and
validates records on the way in.  The engine tolerates unsanitized
entries; this module is where they get rejected.
"""

import json
import re
from dataclasses import asdict
from datetime import datetime
from typing import Any

from ..core.config import PHASE_PARAMS
from ..core.models import (
    LegacyRecommendation,
    Recommendation,
    UserProfile,
    WorkoutEntry,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is non-negative.

    Raises:
        ValidationError: If value is negative
    """
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def validate_positive(value: int | float, name: str) -> int | float:
    """
    Validate that a value is positive.

    Args:
        value: Value to validate
        name: Name for error message

    Returns:
        The value if valid

    Raises:
        ValidationError: If value is not positive
    """
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def validate_phase(phase: str) -> str:
    """Validate a training phase name."""
    if phase not in PHASE_PARAMS:
        raise ValidationError(
            f"Invalid phase: {phase!r}. Must be one of {', '.join(PHASE_PARAMS)}"
        )
    return phase


def entry_to_dict(entry: WorkoutEntry) -> dict[str, Any]:
    """
    Convert WorkoutEntry to dict.

    Optional fields are omitted when unset to keep lines short.
    """
    result: dict[str, Any] = {
        "id": entry.id,
        "exercise_name": entry.exercise_name,
        "date": entry.date,
        "weight_kg": entry.weight_kg,
        "reps": entry.reps,
    }
    if entry.sets_logged is not None:
        result["sets_logged"] = entry.sets_logged
    if entry.rir is not None:
        result["rir"] = entry.rir
    if not entry.active:
        result["active"] = False
    return result


def dict_to_entry(data: dict[str, Any]) -> WorkoutEntry:
    """
    Convert dict to WorkoutEntry.

    Args:
        data: Dict representation

    Returns:
        WorkoutEntry instance

    Raises:
        ValidationError: If data is invalid
    """
    for key in ("id", "exercise_name", "date", "weight_kg", "reps"):
        if key not in data:
            raise ValidationError(f"Missing field: {key}")

    name = data["exercise_name"]
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"Invalid exercise_name: {name!r}. Must be a non-empty string.")

    try:
        weight = float(data["weight_kg"])
        reps = int(data["reps"])
        sets_logged = int(data["sets_logged"]) if data.get("sets_logged") is not None else None
        rir = int(data["rir"]) if data.get("rir") is not None else None
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid number in entry {data.get('id')}: {e}") from e

    validate_positive(weight, "weight_kg")
    validate_positive(reps, "reps")
    if sets_logged is not None:
        validate_positive(sets_logged, "sets_logged")
    if rir is not None:
        validate_non_negative(rir, "rir")

    return WorkoutEntry(
        id=str(data["id"]),
        exercise_name=name,
        date=validate_date(data["date"]),
        weight_kg=weight,
        reps=reps,
        sets_logged=sets_logged,
        rir=rir,
        active=bool(data.get("active", True)),
    )


def entry_to_json_line(entry: WorkoutEntry) -> str:
    """Serialize an entry to a single JSON line (no trailing newline)."""
    return json.dumps(entry_to_dict(entry), separators=(",", ":"))


def json_line_to_entry(line: str) -> WorkoutEntry:
    """
    Deserialize a JSON line to a WorkoutEntry.

    Raises:
        ValidationError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(line.strip())
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object")
    return dict_to_entry(data)


def user_profile_to_dict(profile: UserProfile) -> dict[str, Any]:
    """Convert UserProfile to dict."""
    return {"age": profile.age, "phase": profile.phase}


def dict_to_user_profile(data: dict[str, Any]) -> UserProfile:
    """
    Convert dict to UserProfile.

    Raises:
        ValidationError: If data is invalid
    """
    try:
        age = int(data.get("age", 0))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid age: {data.get('age')!r}") from e
    validate_positive(age, "age")
    phase = validate_phase(data.get("phase", "hypertrophy"))
    return UserProfile(age=age, phase=phase)


def recommendation_to_dict(rec: Recommendation) -> dict[str, Any]:
    """
    Convert a Recommendation to a JSON-compatible dict.

    Keys match the dataclass fields; nested dataclasses become dicts.
    """
    return asdict(rec)


def legacy_to_dict(legacy: LegacyRecommendation) -> dict[str, Any]:
    """Convert a LegacyRecommendation to a JSON-compatible dict."""
    return asdict(legacy)
