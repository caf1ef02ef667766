"""Core planner types: workouts, the weekly plan and the persisted snapshot."""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator, model_validator


DAYS_OF_WEEK: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


class WorkoutType(str, Enum):
    """Fixed set of workout categories."""

    STRENGTH = "Strength"
    CARDIO = "Cardio"
    MOBILITY = "Mobility"
    SPORT = "Sport"
    RECOVERY = "Recovery"


DEFAULT_WORKOUT_TYPE = WorkoutType.STRENGTH


class Workout(BaseModel):
    """A named workout template. Immutable once created."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    type: WorkoutType = DEFAULT_WORKOUT_TYPE
    duration_minutes: int | None = Field(default=None, ge=0, alias="durationMinutes")
    sets: int | None = Field(default=None, ge=0)
    reps: int | None = Field(default=None, ge=0)
    notes: str = ""
    created_at: datetime = Field(alias="createdAt")

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("name must not be blank")
        return stripped

    @field_validator("notes", mode="before")
    @classmethod
    def _normalize_notes(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value


class WeeklyPlan(RootModel[dict[str, tuple[str, ...]]]):
    """Workout-id references for exactly the seven canonical days.

    Construction fails unless every day in ``DAYS_OF_WEEK`` is present and no
    other key is. Sequences are tuples; updates return a new plan.
    """

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _require_canonical_days(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        missing = [day for day in DAYS_OF_WEEK if day not in data]
        extra = sorted(str(key) for key in data if key not in DAYS_OF_WEEK)
        if missing or extra:
            raise ValueError(
                f"weekly plan must contain exactly the seven days (missing={missing}, unexpected={extra})"
            )
        return {day: data[day] for day in DAYS_OF_WEEK}

    @classmethod
    def empty(cls) -> WeeklyPlan:
        return cls({day: () for day in DAYS_OF_WEEK})

    def __getitem__(self, day: str) -> tuple[str, ...]:
        return self.root[day]

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def items(self) -> Iterable[tuple[str, tuple[str, ...]]]:
        return self.root.items()

    def replace_day(self, day: str, workout_ids: Iterable[str]) -> WeeklyPlan:
        """Return a copy with ``day``'s sequence replaced."""
        updated = dict(self.root)
        updated[day] = tuple(workout_ids)
        return WeeklyPlan(updated)

    def without_workout(self, workout_id: str) -> WeeklyPlan:
        """Return a copy with every reference to ``workout_id`` removed."""
        return WeeklyPlan(
            {day: tuple(ref for ref in refs if ref != workout_id) for day, refs in self.root.items()}
        )

    def as_lists(self) -> dict[str, list[str]]:
        return {day: list(refs) for day, refs in self.root.items()}


class Snapshot(BaseModel):
    """Complete persisted planner state."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    workouts: tuple[Workout, ...] = ()
    plan_by_day: WeeklyPlan = Field(default_factory=WeeklyPlan.empty, alias="planByDay")

    def to_storage(self) -> dict[str, Any]:
        """Return the JSON-ready document written under the storage key."""
        return self.model_dump(mode="json", by_alias=True)


class ResolvedAssignment(BaseModel):
    """A plan entry paired with the workout it references, if that still exists."""

    model_config = ConfigDict(frozen=True)

    day: str
    index: int
    workout_id: str
    workout: Workout | None = None

    @property
    def is_missing(self) -> bool:
        return self.workout is None


class KPISummary(BaseModel):
    """Derived plan statistics. Never persisted."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_workouts_defined: int = Field(alias="totalWorkoutsDefined")
    total_assignments: int = Field(alias="totalAssignments")
    avg_assignments_per_day: float = Field(alias="avgAssignmentsPerDay")
    assignments_per_day: dict[str, int] = Field(alias="assignmentsPerDay")
