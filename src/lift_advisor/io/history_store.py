"""
JSONL-based history storage for workout entries.

Handles reading, writing, and managing the history file.  The store is the
only place entries are mutated (edit, soft exclusion, deletion); the
engine only ever reads the snapshot returned by load_entries().
"""

import json
import logging
import uuid
from dataclasses import replace
from pathlib import Path

from ..core.models import UserProfile, WorkoutEntry
from .serializers import (
    ValidationError,
    dict_to_entry,
    dict_to_user_profile,
    entry_to_dict,
    entry_to_json_line,
    json_line_to_entry,
    user_profile_to_dict,
    validate_date,
)

logger = logging.getLogger(__name__)


class HistoryStore:
    """
    Manages workout entries stored in JSONL format.

    The history file contains one JSON object per line, one entry each.
    A separate profile.json file next to it stores the user profile.
    """

    def __init__(self, history_path: str | Path):
        """
        Initialize the history store.

        Args:
            history_path: Path to the JSONL history file
        """
        self.history_path = Path(history_path)
        self.profile_path = self.history_path.parent / "profile.json"

    def exists(self) -> bool:
        """Check if the history file exists."""
        return self.history_path.exists()

    def init(self) -> None:
        """
        Initialize empty history file if it doesn't exist.

        Creates parent directories if needed.
        """
        self.history_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.history_path.exists():
            self.history_path.touch()

    def load_profile(self) -> UserProfile | None:
        """
        Load user profile from profile.json.

        Returns:
            UserProfile if file exists and is valid, None otherwise
        """
        if not self.profile_path.exists():
            return None

        try:
            with open(self.profile_path, "r") as f:
                data = json.load(f)
            return dict_to_user_profile(data)
        except (json.JSONDecodeError, ValidationError, ValueError) as e:
            logger.warning("ignoring unreadable profile %s: %s", self.profile_path, e)
            return None

    def save_profile(self, profile: UserProfile) -> None:
        """
        Save user profile to profile.json.

        Args:
            profile: User profile to save
        """
        self.profile_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.profile_path, "w") as f:
            json.dump(user_profile_to_dict(profile), f, indent=2)

    def load_entries(self) -> list[WorkoutEntry]:
        """
        Load all entries from the history file.

        Returns:
            List of WorkoutEntry, sorted by date (stable within a day)

        Raises:
            FileNotFoundError: If history file doesn't exist
            ValidationError: If a line cannot be parsed
        """
        if not self.history_path.exists():
            raise FileNotFoundError(
                f"History file not found: {self.history_path}. Run 'init' first."
            )

        entries: list[WorkoutEntry] = []

        with open(self.history_path, "r") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue

                try:
                    entries.append(json_line_to_entry(line))
                except (ValidationError, ValueError) as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.history_path}: {e}"
                    ) from e

        entries.sort(key=lambda e: e.date)
        return entries

    def _write_entries(self, entries: list[WorkoutEntry]) -> None:
        """
        Write all entries to the history file.

        Args:
            entries: Entries to write
        """
        with open(self.history_path, "w") as f:
            for entry in entries:
                f.write(entry_to_json_line(entry) + "\n")

    def append_entry(
        self,
        exercise_name: str,
        date: str,
        weight_kg: float,
        reps: int,
        sets_logged: int | None = None,
        rir: int | None = None,
    ) -> WorkoutEntry:
        """
        Log a new entry and return it with its generated id.

        Maintains chronological order by inserting after entries of the
        same or an earlier date.

        Raises:
            FileNotFoundError: If history file doesn't exist
            ValidationError: If the values are invalid
        """
        entries = self.load_entries()
        entry = dict_to_entry(
            {
                "id": uuid.uuid4().hex[:8],
                "exercise_name": exercise_name,
                "date": date,
                "weight_kg": weight_kg,
                "reps": reps,
                "sets_logged": sets_logged,
                "rir": rir,
            }
        )

        insert_idx = len(entries)
        for i, existing in enumerate(entries):
            if entry.date < existing.date:
                insert_idx = i
                break
        entries.insert(insert_idx, entry)

        self._write_entries(entries)
        logger.debug("logged %s %s %gkg x %d", entry.id, exercise_name, weight_kg, reps)
        return entry

    def _index_of(self, entries: list[WorkoutEntry], entry_id: str) -> int:
        for i, entry in enumerate(entries):
            if entry.id == entry_id:
                return i
        raise KeyError(f"No entry with id {entry_id!r}")

    def update_entry(
        self,
        entry_id: str,
        date: str | None = None,
        weight_kg: float | None = None,
        reps: int | None = None,
        rir: int | None = None,
    ) -> WorkoutEntry:
        """
        Edit weight, reps, RIR and/or date of an entry.

        Raises:
            KeyError: If no entry has this id
            ValidationError: If the new values are invalid
        """
        entries = self.load_entries()
        idx = self._index_of(entries, entry_id)
        old = entries[idx]
        if date is not None:
            validate_date(date)

        updated = replace(
            old,
            date=date if date is not None else old.date,
            weight_kg=weight_kg if weight_kg is not None else old.weight_kg,
            reps=reps if reps is not None else old.reps,
            rir=rir if rir is not None else old.rir,
        )
        # Round-trip through the validator so edits obey the same rules as logging
        updated = dict_to_entry(entry_to_dict(updated))

        entries[idx] = updated
        entries.sort(key=lambda e: e.date)
        self._write_entries(entries)
        return updated

    def set_active(self, entry_id: str, active: bool) -> WorkoutEntry:
        """
        Soft-exclude (active=False) or re-include an entry.

        Raises:
            KeyError: If no entry has this id
        """
        entries = self.load_entries()
        idx = self._index_of(entries, entry_id)
        entries[idx] = replace(entries[idx], active=active)
        self._write_entries(entries)
        return entries[idx]

    def delete_entry(self, entry_id: str) -> WorkoutEntry:
        """
        Delete an entry permanently.

        Raises:
            KeyError: If no entry has this id
        """
        entries = self.load_entries()
        idx = self._index_of(entries, entry_id)
        removed = entries.pop(idx)
        self._write_entries(entries)
        return removed


def get_default_history_path() -> Path:
    """
    Get the default history file path.

    Returns:
        ~/.lift-advisor/history.jsonl
    """
    return Path.home() / ".lift-advisor" / "history.jsonl"

