"""Tests for the weekly plan model and workout summaries."""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from workout_planner.models.domain import DAYS_OF_WEEK, WeeklyPlan, Workout, WorkoutType
from workout_planner.models.schemas import describe_workout


def _workout(**overrides) -> Workout:
    fields = {
        "id": "w1",
        "name": "Legs",
        "createdAt": datetime(2026, 10, 18, tzinfo=timezone.utc),
    }
    fields.update(overrides)
    return Workout.model_validate(fields)


class TestWeeklyPlan:
    """Fixed seven-day plan invariants."""

    def test_empty_has_all_days_in_order(self):
        plan = WeeklyPlan.empty()
        assert list(plan) == list(DAYS_OF_WEEK)
        assert all(plan[day] == () for day in DAYS_OF_WEEK)

    def test_missing_day_is_rejected(self):
        days = {day: [] for day in DAYS_OF_WEEK if day != "Sunday"}
        with pytest.raises(ValidationError):
            WeeklyPlan(days)

    def test_extra_day_is_rejected(self):
        days = {day: [] for day in DAYS_OF_WEEK}
        days["Funday"] = []
        with pytest.raises(ValidationError):
            WeeklyPlan(days)

    def test_keys_are_reordered_canonically(self):
        days = {day: [] for day in reversed(DAYS_OF_WEEK)}
        assert list(WeeklyPlan(days)) == list(DAYS_OF_WEEK)

    def test_replace_day_returns_new_plan(self):
        plan = WeeklyPlan.empty()
        updated = plan.replace_day("Monday", ["a", "b"])
        assert plan["Monday"] == ()
        assert updated["Monday"] == ("a", "b")

    def test_without_workout_filters_every_day(self):
        plan = WeeklyPlan.empty().replace_day("Monday", ["a", "b", "a"]).replace_day("Sunday", ["a"])
        cleaned = plan.without_workout("a")
        assert cleaned["Monday"] == ("b",)
        assert cleaned["Sunday"] == ()

    def test_as_lists(self):
        plan = WeeklyPlan.empty().replace_day("Friday", ["x"])
        assert plan.as_lists()["Friday"] == ["x"]
        assert plan.model_dump()["Friday"] == ("x",)


class TestWorkout:
    """Workout validation."""

    def test_workout_is_immutable(self):
        workout = _workout()
        with pytest.raises(ValidationError):
            workout.name = "Arms"  # type: ignore[misc]

    def test_negative_counts_rejected(self):
        with pytest.raises(ValidationError):
            _workout(sets=-1)

    def test_type_accepts_enum_values(self):
        assert _workout(type="Recovery").type is WorkoutType.RECOVERY


class TestDescribeWorkout:
    """One-line workout summaries."""

    def test_full_summary(self):
        workout = _workout(type="Strength", durationMinutes=45, sets=3, reps=10, notes="tempo")
        assert describe_workout(workout) == "Strength • 45 min • 3x10 • notes"

    def test_sets_without_reps_are_skipped(self):
        assert describe_workout(_workout(sets=3)) == "Strength"

    def test_zero_duration_is_not_shown(self):
        assert describe_workout(_workout(type="Cardio", durationMinutes=0)) == "Cardio"
