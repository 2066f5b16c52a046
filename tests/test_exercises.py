"""
Tests for the YAML exercise table and user overrides.
"""

import pytest

from lift_advisor.core.exercises import EXERCISE_REGISTRY, get_exercise_config
from lift_advisor.core.exercises.loader import (
    exercise_from_dict,
    get_bundled_yaml_path,
    load_exercises_from_yaml,
)


@pytest.fixture
def bundled(tmp_path):
    path = tmp_path / "exercises.yaml"
    path.write_text(
        "exercises:\n"
        "  _default:\n"
        "    load_increment_kg: 2.5\n"
        "    max_weekly_sets: 16\n"
        "  Squat:\n"
        "    load_increment_kg: 5.0\n"
        "    max_weekly_sets: 16\n"
    )
    return path


class TestRegistry:

    def test_bundled_table(self):
        squat = get_exercise_config("Squat")
        assert squat.load_increment_kg == 5.0
        assert squat.micro_increment_kg == 2.5

        front = get_exercise_config("Front Squat")
        assert front.estimate_modifier == pytest.approx(0.82)

        assert get_exercise_config("Lunge").rir_adjustment == 1
        assert get_exercise_config("Overhead Press").load_increment_kg == 1.25

    def test_unknown_exercise_uses_default(self):
        cfg = get_exercise_config("Cable Crossover")
        assert cfg is EXERCISE_REGISTRY["_default"]
        assert cfg.load_increment_kg == 2.5

    def test_bundled_file_is_found(self):
        assert get_bundled_yaml_path().exists()


class TestLoader:

    def test_user_override_is_deep_merged(self, tmp_path, bundled):
        user = tmp_path / "user.yaml"
        user.write_text("exercises:\n  Squat:\n    load_increment_kg: 2.5\n")

        table = load_exercises_from_yaml(bundled, user)
        assert table["Squat"].load_increment_kg == 2.5
        assert table["Squat"].max_weekly_sets == 16

    def test_user_can_add_exercises(self, tmp_path, bundled):
        user = tmp_path / "user.yaml"
        user.write_text(
            "exercises:\n"
            "  Hip Thrust:\n"
            "    load_increment_kg: 5\n"
            "    max_weekly_sets: 12\n"
            "    rir_adjustment: 1\n"
        )
        table = load_exercises_from_yaml(bundled, user)
        assert table["Hip Thrust"].rir_adjustment == 1

    def test_broken_override_keeps_bundled_entry(self, tmp_path, bundled):
        user = tmp_path / "user.yaml"
        user.write_text("exercises:\n  Squat:\n    load_increment_kg: -1\n")

        with pytest.warns(UserWarning, match="Squat"):
            table = load_exercises_from_yaml(bundled, user)
        assert table["Squat"].load_increment_kg == 5.0

    def test_incomplete_user_exercise_is_skipped(self, tmp_path, bundled):
        user = tmp_path / "user.yaml"
        user.write_text("exercises:\n  Sled Push:\n    load_increment_kg: 10\n")

        with pytest.warns(UserWarning, match="Sled Push"):
            table = load_exercises_from_yaml(bundled, user)
        assert "Sled Push" not in table

    def test_unparseable_user_file_is_ignored(self, tmp_path, bundled):
        user = tmp_path / "user.yaml"
        user.write_text("exercises: [unclosed\n")

        with pytest.warns(UserWarning):
            table = load_exercises_from_yaml(bundled, user)
        assert set(table) == {"_default", "Squat"}

    def test_invalid_bundled_entry_raises(self, tmp_path):
        path = tmp_path / "exercises.yaml"
        path.write_text("exercises:\n  Squat:\n    max_weekly_sets: 16\n")
        with pytest.raises(ValueError, match="Squat"):
            load_exercises_from_yaml(path, None)

    def test_exercise_from_dict_requires_fields(self):
        with pytest.raises(ValueError):
            exercise_from_dict("X", {"load_increment_kg": 2.5})
        with pytest.raises(ValueError):
            exercise_from_dict("X", "not a mapping")
