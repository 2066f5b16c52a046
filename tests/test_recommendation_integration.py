"""
Integration tests for generate_recommendation().

Each test runs the full pipeline (filter → route → classify → prescribe →
explain) against a frozen "today".  Hand-computed expected values are in
the comments; e1RM = w × 36 / (37 − min(reps + RIR, 12)), RIR defaults to 2.
"""

from datetime import date, timedelta

import pytest

from lift_advisor import generate_recommendation, to_legacy
from lift_advisor.core.models import WorkoutEntry

TODAY = date(2026, 3, 1)


# ===========================================================================
# Helpers
# ===========================================================================

def _history(*rows, exercise: str = "Squat") -> list[WorkoutEntry]:
    """Build entries from (days_ago, weight, reps[, rir]) tuples."""
    entries = []
    for i, row in enumerate(rows):
        days_ago, weight, reps = row[:3]
        rir = row[3] if len(row) > 3 else None
        entries.append(
            WorkoutEntry(
                id=f"{exercise[:2].lower()}{i}",
                exercise_name=exercise,
                date=(TODAY - timedelta(days=days_ago)).isoformat(),
                weight_kg=weight,
                reps=reps,
                rir=rir,
            )
        )
    return entries


def _generate(history, exercise="Squat", age=30, phase="hypertrophy"):
    return generate_recommendation(exercise, history, age, phase, today=TODAY)


def _is_multiple_of_increment(weight: float) -> bool:
    q = weight / 1.25
    return abs(q - round(q)) < 1e-9


# ===========================================================================
# Benchmark mode
# ===========================================================================

class TestBenchmark:

    @pytest.mark.parametrize("phase", ["hypertrophy", "strength", "peaking", "explosive"])
    @pytest.mark.parametrize("age", [22, 47, 70])
    def test_empty_history(self, phase, age):
        rec = _generate([], exercise="Deadlift", age=age, phase=phase)

        assert rec.benchmark_mode is True
        assert rec.training_status == "benchmark_mode"
        assert rec.prescription.sets == "3-5"
        assert rec.prescription.reps == "5-12"
        assert rec.prescription.weight_kg is None
        assert rec.prescription.rir_target == 3
        assert rec.prescription.benchmark_instructions
        assert "benchmark_mode" in rec.flags
        assert rec.calculated_estimate_kg == 0.0
        assert rec.intensity_percent is None

    def test_other_exercises_do_not_count(self):
        rec = _generate(_history((3, 80, 8), exercise="Bench Press"), exercise="Squat")
        assert rec.benchmark_mode

    def test_only_excluded_entries(self):
        history = _history((3, 100, 8))
        history[0].active = False
        assert _generate(history).benchmark_mode

    def test_unanalysable_single_session(self):
        """A session whose sets all estimate to 0 re-issues the benchmark."""
        rec = _generate(_history((3, 0, 8), (3, 0, 5)))
        assert rec.benchmark_mode
        assert rec.prescription.weight_kg is None
        assert rec.flags == ["benchmark_mode", "benchmark_analysis_failed"]


# ===========================================================================
# First prescription after the benchmark
# ===========================================================================

class TestPostBenchmark:

    def test_single_entry(self):
        """e1RM 133.3; × 0.70 = 93.31 → 93.75"""
        rec = _generate(_history((3, 100, 8)))

        assert rec.benchmark_mode is False
        assert rec.training_status == "progressive"
        assert "post_benchmark_first_prescription" in rec.flags
        assert rec.prescription.weight_kg == 93.75
        assert rec.prescription.sets == 4
        assert rec.calculated_estimate_kg == 133.3
        assert rec.benchmark_baseline is not None
        assert rec.benchmark_baseline.estimate_kg == 133.3

    def test_best_set_of_the_session_is_the_baseline(self):
        """100 × 8 (133.3) beats 105 × 6 (105 × 36 / 29 = 130.3)"""
        history = _history((3, 105, 6), (3, 100, 8), (3, 60, 12))
        rec = _generate(history)

        assert rec.benchmark_baseline.best_set is history[1]
        assert rec.benchmark_baseline.session_date == history[1].date

    def test_front_squat_modifier(self):
        """133.33 × 0.82 = 109.3; × 0.70 = 76.51 → 76.25"""
        rec = _generate(_history((2, 100, 8), exercise="Front Squat"), exercise="Front Squat")
        assert rec.calculated_estimate_kg == 109.3
        assert rec.prescription.weight_kg == 76.25

    def test_strength_phase(self):
        """133.3 × 0.84 = 111.97 → 112.5; 5 base sets at age 30"""
        rec = _generate(_history((3, 100, 8)), phase="strength")
        p = rec.prescription
        assert p.weight_kg == 112.5
        assert p.sets == 5
        assert p.reps == "4-6"
        assert p.rest_seconds == "180-300"
        assert p.rir_target == 1

    def test_exercise_rir_adjustment(self):
        rec = _generate(_history((3, 60, 10), exercise="Lunge"), exercise="Lunge")
        assert rec.prescription.rir_target == 3  # phase 2 + lunge 1

    def test_fourteen_days_is_not_a_break(self):
        rec = _generate(_history((14, 100, 8)))
        assert rec.training_status == "progressive"
        assert "returning_from_break" not in rec.flags


# ===========================================================================
# Returning from a break
# ===========================================================================

class TestReturningFromBreak:

    def test_short_break(self):
        """133.3 − 10% = 119.97; × 0.70 = 83.98 → 83.75"""
        rec = _generate(_history((40, 100, 8), (20, 100, 8)))

        assert "returning_from_break" in rec.flags
        assert rec.training_status == "insufficient_data"
        assert rec.prescription.weight_kg == 83.75
        assert rec.prescription.rir_target == 3
        assert "20 days" in rec.rationale
        assert "10%" in rec.rationale

    def test_break_reports_the_unreduced_estimate(self):
        """Reduction moves the load only: e1RM stays 133.3; 83.75 / 133.3 = 63%"""
        rec = _generate(_history((40, 100, 8), (20, 100, 8)))

        assert rec.calculated_estimate_kg == 133.3
        assert rec.intensity_percent == 63
        assert "133.3" in rec.reasoning.calculation

    def test_long_break(self):
        """133.3 − 15% = 113.3; × 0.70 = 79.31 → 78.75"""
        rec = _generate(_history((30, 100, 8)))

        assert rec.prescription.weight_kg == 78.75
        assert "30 days" in rec.rationale
        assert "15%" in rec.rationale

    def test_single_old_entry_is_a_break_not_a_benchmark(self):
        rec = _generate(_history((21, 100, 8)))
        assert "returning_from_break" in rec.flags
        assert "post_benchmark_first_prescription" not in rec.flags

    def test_reasoning_mentions_the_gap(self):
        rec = _generate(_history((20, 100, 8)))
        assert "20 days" in rec.reasoning.trend


# ===========================================================================
# Normal path
# ===========================================================================

class TestProgression:

    def test_scenario_a(self):
        """
        Current best 110 × 8 = 146.7 vs 100 × 8 = 133.3 five weeks ago: +10%.
        Last set 8 reps (< 12) → hold 110 kg, aim for 9.
        """
        history = [
            WorkoutEntry("a1", "Squat", (TODAY - timedelta(days=2)).isoformat(), 110, 8),
            WorkoutEntry("a2", "Squat", (TODAY - timedelta(days=5)).isoformat(), 107.5, 8),
            WorkoutEntry("a3", "Squat", (TODAY - timedelta(days=8)).isoformat(), 105, 8),
            WorkoutEntry("a4", "Squat", (TODAY - timedelta(days=35)).isoformat(), 100, 8),
        ]
        rec = _generate(history)

        assert rec.training_status in ("progressing", "plateau")
        assert rec.training_status == "progressing"
        assert rec.prescription.weight_kg == 110.0
        assert rec.prescription.target_reps == 9
        assert rec.prescription.sets >= 2
        assert "+10.1%" in rec.reasoning.trend
        assert "110kg × 8" in rec.reasoning.last_session

    def test_top_of_range_increases_load(self):
        """100 × 12 @ RIR 2 = 144.0 vs 133.3 → progressing; 100 + 5 = 105"""
        rec = _generate(_history((35, 100, 8), (3, 100, 12, 2)))

        assert rec.training_status == "progressing"
        assert rec.prescription.weight_kg == 105.0
        assert rec.prescription.target_reps == 8
        assert "Increasing load by 5kg" in rec.rationale

    def test_overhead_press_uses_small_increment(self):
        history = _history((35, 40, 8), (3, 40, 12, 1), exercise="Overhead Press")
        rec = _generate(history, exercise="Overhead Press")
        assert rec.prescription.weight_kg == 41.25

    def test_short_term_fallback_for_new_lifters(self):
        """No entry 4-6 weeks back: 133.3 → 140.0 over three sessions is progress."""
        rec = _generate(_history((9, 100, 8), (6, 102.5, 8), (3, 105, 8)))
        assert rec.training_status == "progressing"
        assert rec.prescription.weight_kg == 105.0

    def test_back_off_sets_do_not_read_as_regression(self):
        """Session bests 133.3 → 146.7; the 100 and 90 kg back-off sets are ignored."""
        rec = _generate(_history((6, 100, 8), (2, 110, 8), (2, 100, 8), (2, 90, 8)))

        assert rec.training_status == "progressing"
        assert "recovery_week_recommended" not in rec.flags
        assert rec.prescription.weight_kg == 110.0
        assert rec.prescription.target_reps == 9

    def test_age_reduces_sets(self):
        history = _history((35, 100, 8), (3, 110, 8))
        assert _generate(history, age=30).prescription.sets == 4
        assert _generate(history, age=65).prescription.sets == 3


class TestRegression:

    def test_deload(self):
        """100 × 8 = 133.3 vs 120 × 8 = 160.0 → −16.7%: deload"""
        rec = _generate(_history((35, 120, 8), (6, 100, 8), (3, 100, 8)))

        assert rec.training_status == "regressing"
        assert rec.prescription.sets == 2
        assert rec.prescription.weight_kg == 75.0
        assert rec.prescription.rir_target == 4
        assert "recovery_week_recommended" in rec.flags
        assert "significant_strength_loss_detected" in rec.flags
        assert rec.calculated_estimate_kg == 133.3

    def test_mild_regression_has_no_loss_flag(self):
        """100 × 8 = 133.3 vs 105 × 8 = 140.0 → −4.8%"""
        rec = _generate(_history((35, 105, 8), (3, 100, 8)))
        assert rec.training_status == "regressing"
        assert "significant_strength_loss_detected" not in rec.flags

    def test_legacy_view_of_deload(self):
        legacy = to_legacy(_generate(_history((35, 120, 8), (6, 100, 8), (3, 100, 8))))
        assert legacy.status == "deload"
        assert legacy.deload_recommended is True


class TestPlateau:
    """
    Previous 100 × 8 = 133.3 five weeks ago; recent sessions around
    101.25 × 8 = 135.0 (+1.3%, inside the ±2.5% band).
    """

    def test_reset_after_three_sessions_at_the_same_weight(self):
        """count 3 → reset: 101.25 × 0.9 = 91.125 → 91.25, aim for 12"""
        rec = _generate(_history((35, 100, 8), (9, 101.25, 8), (6, 101.25, 8), (3, 101.25, 8)))

        assert rec.training_status == "plateau"
        assert rec.plateau_strategy == "reset"
        assert rec.prescription.weight_kg == 91.25
        assert rec.prescription.target_reps == 12
        assert "plateau_strategy_applied" in rec.flags

    def test_extend_rep_ceiling(self):
        rec = _generate(_history((35, 100, 8), (9, 100, 8), (6, 101.25, 8), (3, 101.25, 8)))

        assert rec.plateau_strategy == "extend_rep_ceiling"
        assert rec.prescription.weight_kg == 101.25
        assert rec.prescription.target_reps == 14
        assert rec.prescription.reps == "8-14"

    def test_add_set(self):
        rec = _generate(_history((35, 100, 8), (9, 100, 8), (6, 100, 8), (3, 101.25, 8)))

        assert rec.plateau_strategy == "add_set"
        assert rec.prescription.sets == 5
        assert rec.prescription.weight_kg == 101.25

    def test_micro_load(self):
        """count 4 → micro-load: 101.25 + 2.5 = 103.75"""
        rec = _generate(
            _history((35, 100, 8), (12, 101.25, 8), (9, 101.25, 8), (6, 101.25, 8), (3, 101.25, 8))
        )

        assert rec.plateau_strategy == "micro_load"
        assert rec.prescription.weight_kg == 103.75
        assert rec.prescription.target_reps == 8

    def test_noisy_sessions_are_not_a_plateau(self):
        """130.0 / 133.3 / 135.0 spreads 3.8%: hold and push reps instead"""
        rec = _generate(_history((35, 100, 8), (9, 97.5, 8), (6, 100, 8), (3, 101.25, 8)))

        assert rec.training_status == "plateau"
        assert rec.plateau_strategy is None
        assert "plateau_strategy_applied" not in rec.flags
        assert rec.prescription.weight_kg == 101.25
        assert rec.prescription.target_reps == 9
        assert rec.rationale.startswith("Stable performance")


# ===========================================================================
# Flags and invariants
# ===========================================================================

class TestFlagsAndInvariants:

    def test_high_rep_outlier(self):
        rec = _generate(_history((6, 60, 15), (3, 60, 20)))
        assert "high_rep_data_detected_e1rm_estimated" in rec.flags

    def test_flags_are_unique(self):
        rec = _generate(_history((35, 120, 8), (6, 100, 8), (3, 100, 20)))
        assert len(rec.flags) == len(set(rec.flags))

    def test_idempotent(self):
        history = _history((35, 100, 8), (9, 101.25, 8), (6, 101.25, 8), (3, 101.25, 8))
        assert _generate(history) == _generate(history)

    def test_unknown_phase_matches_hypertrophy(self):
        history = _history((35, 100, 8), (3, 110, 8))
        assert _generate(history, phase="bogus") == _generate(history, phase="hypertrophy")

    def test_unknown_exercise_uses_default_config(self):
        """Default increment 2.5: 100 × 12 @ RIR 2 → 102.5"""
        history = _history((35, 100, 8), (3, 100, 12, 2), exercise="Zercher Squat")
        rec = _generate(history, exercise="Zercher Squat")
        assert rec.prescription.weight_kg == 102.5

    def test_excluded_entries_do_not_change_the_result(self):
        history = _history((35, 100, 8), (3, 110, 8))
        noisy = history + _history((1, 300, 8))
        noisy[-1].active = False
        assert _generate(noisy) == _generate(history)

    @pytest.mark.parametrize("phase", ["hypertrophy", "strength", "peaking", "explosive"])
    @pytest.mark.parametrize(
        "rows",
        [
            ((3, 97.3, 7),),
            ((20, 83.1, 9),),
            ((40, 142.0, 5), (3, 131.7, 6)),
            ((35, 61.0, 8), (9, 63.3, 8), (6, 63.3, 8), (3, 63.3, 8)),
            ((8, 55.5, 11), (4, 57.0, 12, 1)),
        ],
    )
    def test_weights_are_multiples_of_increment(self, phase, rows):
        rec = _generate(_history(*rows), phase=phase)
        w = rec.prescription.weight_kg
        assert w is not None
        assert _is_multiple_of_increment(w)
        assert rec.calculated_estimate_kg >= 0
        if isinstance(rec.prescription.sets, int):
            assert rec.prescription.sets >= 2

    def test_reasoning_calculation_matches_weight(self):
        rec = _generate(_history((35, 100, 8), (3, 100, 12, 2)))
        assert "105kg" in rec.reasoning.calculation
        assert "105kg" in rec.reasoning.next_step

    def test_legacy_from_engine(self):
        legacy = to_legacy(_generate(_history((35, 100, 8), (3, 110, 8))))
        assert legacy.status == "progress"
        assert legacy.next_workout.target_reps == 9
        assert legacy.next_workout.sets == 4
        assert legacy.current_performance.total_reps == 36
