"""Pydantic models describing API payloads."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from workout_planner.models.domain import ResolvedAssignment, Workout


class WorkoutDraft(BaseModel):
    """Form-shaped input for creating a workout.

    Numeric fields arrive as text or numbers; blank text means "not specified".
    Values are validated and converted by the planner store.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    type: str | None = None
    duration_minutes: int | str | None = Field(default=None, alias="durationMinutes")
    sets: int | str | None = None
    reps: int | str | None = None
    notes: str | None = None


class AssignmentCreate(BaseModel):
    """Schema for assigning a workout to a day."""

    model_config = ConfigDict(populate_by_name=True)

    workout_id: str | None = Field(default=None, alias="workoutId")


def describe_workout(workout: Workout) -> str:
    """
    Build the one-line summary shown under a workout's name.

    Example:
        "Strength • 45 min • 3x10 • notes"
    """
    parts: list[str] = []
    if workout.type:
        parts.append(workout.type.value)
    if workout.duration_minutes:
        parts.append(f"{workout.duration_minutes} min")
    if workout.sets and workout.reps:
        parts.append(f"{workout.sets}x{workout.reps}")
    if workout.notes:
        parts.append("notes")
    return " • ".join(parts) if parts else "No details"


class WorkoutResponse(Workout):
    """Workout as returned by the API, with its display summary."""

    meta: str

    @classmethod
    def from_workout(cls, workout: Workout) -> WorkoutResponse:
        return cls(**workout.model_dump(), meta=describe_workout(workout))


class PlanEntryResponse(BaseModel):
    """One assignment within a day; ``missing`` marks a reference to a deleted workout."""

    model_config = ConfigDict(populate_by_name=True)

    index: int
    workout_id: str = Field(alias="workoutId")
    missing: bool
    workout: WorkoutResponse | None = None

    @classmethod
    def from_resolved(cls, entry: ResolvedAssignment) -> PlanEntryResponse:
        return cls(
            index=entry.index,
            workout_id=entry.workout_id,
            missing=entry.is_missing,
            workout=WorkoutResponse.from_workout(entry.workout) if entry.workout is not None else None,
        )


class DayPlanResponse(BaseModel):
    """Schema for one day of the weekly plan."""

    day: str
    count: int
    entries: list[PlanEntryResponse] = []


class WeeklyPlanResponse(BaseModel):
    """Schema for the whole week, in canonical day order."""

    days: list[DayPlanResponse]


class ResetResponse(BaseModel):
    """Schema confirming a planner reset."""

    status: str
    message: str
