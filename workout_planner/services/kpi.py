"""KPI calculations for the weekly workout plan.

All functions are pure and tolerate malformed input: a plan that is not a
mapping counts as empty, a day whose value is not a sequence counts as zero
assignments, and a workout library that is not a sequence counts as zero
workouts. Callers normally pass a normalized ``WeeklyPlan`` but nothing here
relies on it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from workout_planner.models.domain import DAYS_OF_WEEK, KPISummary, WeeklyPlan


def _plan_mapping(plan_by_day: Any) -> Mapping[Any, Any]:
    if isinstance(plan_by_day, WeeklyPlan):
        return plan_by_day.root
    if isinstance(plan_by_day, Mapping):
        return plan_by_day
    return {}


def _sequence_length(value: Any) -> int:
    return len(value) if isinstance(value, (list, tuple)) else 0


def count_assignments_per_day(plan_by_day: Any) -> dict[str, int]:
    """
    Count assigned workouts for every day key present in the plan.

    Example:
        >>> count_assignments_per_day({"Monday": ["a", "b"], "Tuesday": []})
        {'Monday': 2, 'Tuesday': 0}
    """
    return {day: _sequence_length(refs) for day, refs in _plan_mapping(plan_by_day).items()}


def total_assignments(plan_by_day: Any) -> int:
    """Total number of assignments across the week; 0 for an empty or malformed plan."""
    return sum(_sequence_length(refs) for refs in _plan_mapping(plan_by_day).values())


def average_assignments_per_day(plan_by_day: Any) -> float:
    """
    Average assignments per day over the canonical seven-day week.

    The denominator is always the number of canonical days, so a plan with
    empty or absent days still averages over the full week and an empty plan
    yields 0.0.
    """
    return total_assignments(plan_by_day) / len(DAYS_OF_WEEK)


def compute_kpis(workouts: Any, plan_by_day: Any) -> KPISummary:
    """Compose the individual KPIs into one summary.

    ``avg_assignments_per_day`` is the raw float; rounding is left to whoever
    displays it.
    """
    return KPISummary(
        total_workouts_defined=len(workouts) if isinstance(workouts, (list, tuple)) else 0,
        total_assignments=total_assignments(plan_by_day),
        avg_assignments_per_day=average_assignments_per_day(plan_by_day),
        assignments_per_day=count_assignments_per_day(plan_by_day),
    )
