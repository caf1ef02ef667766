"""Planner state store: the workout library and weekly plan, persisted as one snapshot.

The store owns the canonical in-memory ``Snapshot`` and crosses the storage
boundary only in ``load``, ``save`` and ``reset_all``. Every mutation builds
the next snapshot, writes it, and only then swaps it in, so a failed write
leaves the in-memory state untouched and a validation error writes nothing.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from pydantic import ValidationError

from workout_planner.exceptions import PlannerValidationError
from workout_planner.models.domain import (
    DAYS_OF_WEEK,
    DEFAULT_WORKOUT_TYPE,
    ResolvedAssignment,
    Snapshot,
    WeeklyPlan,
    Workout,
    WorkoutType,
)
from workout_planner.models.schemas import WorkoutDraft
from workout_planner.services.storage import KeyValueStorage


logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "workoutPlanner_v1"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_workout_id() -> str:
    return uuid4().hex


def _normalize_workouts(raw: Any) -> tuple[Workout, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        logger.warning("Discarding persisted workouts: expected a list, got %s", type(raw).__name__)
        return ()

    workouts: list[Workout] = []
    seen: set[str] = set()
    for position, entry in enumerate(raw):
        if not isinstance(entry, Mapping):
            logger.warning("Dropping persisted workout #%d: not an object", position)
            continue
        try:
            workout = Workout.model_validate(dict(entry))
        except ValidationError as exc:
            logger.warning("Dropping persisted workout #%d: %s", position, exc.errors()[0].get("msg"))
            continue
        if workout.id in seen:
            logger.warning("Dropping persisted workout #%d: duplicate id %s", position, workout.id)
            continue
        seen.add(workout.id)
        workouts.append(workout)
    return tuple(workouts)


def _normalize_plan(raw: Any) -> WeeklyPlan:
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.warning("Rebuilding weekly plan: expected an object, got %s", type(raw).__name__)
        return WeeklyPlan.empty()

    days: dict[str, tuple[str, ...]] = {}
    for day in DAYS_OF_WEEK:
        refs = raw.get(day)
        if not isinstance(refs, list):
            days[day] = ()
            continue
        days[day] = tuple(ref for ref in refs if isinstance(ref, str) and ref)
    return WeeklyPlan(days)


def normalize_snapshot(document: Any) -> Snapshot:
    """Coerce a decoded snapshot document into a valid ``Snapshot``.

    Shape problems are repaired rather than rejected: non-object documents
    yield the default snapshot, bad workout entries are dropped, and the plan
    always ends up with exactly the seven canonical days.
    """
    if not isinstance(document, Mapping):
        logger.warning("Persisted planner state is not an object; starting fresh")
        return Snapshot()
    return Snapshot(
        workouts=_normalize_workouts(document.get("workouts")),
        plan_by_day=_normalize_plan(document.get("planByDay")),
    )


def parse_snapshot(raw: str | bytes | None) -> Snapshot:
    """Decode stored text into a normalized snapshot; never raises."""
    if raw is None or (isinstance(raw, (str, bytes)) and not raw.strip()):
        return Snapshot()
    try:
        document = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Persisted planner state is not valid JSON; starting fresh")
        return Snapshot()
    return normalize_snapshot(document)


def _parse_count(value: Any, field: str) -> int | None:
    """Turn form input into an optional non-negative integer (blank means unset).

    Integral decimal text such as ``"30.0"`` is accepted as 30; fractional
    values like ``"12.5"`` are rejected.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise PlannerValidationError(f"{field} must be a whole number.", field=field)
    if isinstance(value, int):
        number = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = int(text)
        except ValueError:
            number = _integral_float(text)
            if number is None:
                raise PlannerValidationError(f"{field} must be a whole number.", field=field) from None
    if number < 0:
        raise PlannerValidationError(f"{field} must not be negative.", field=field)
    return number


def _integral_float(text: str) -> int | None:
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


def _parse_type(value: str | None) -> WorkoutType:
    if value is None or not value.strip():
        return DEFAULT_WORKOUT_TYPE
    wanted = value.strip().lower()
    for member in WorkoutType:
        if member.value.lower() == wanted:
            return member
    allowed = ", ".join(member.value for member in WorkoutType)
    raise PlannerValidationError(f"Workout type must be one of {allowed}.", field="type")


def _coerce_draft(fields: WorkoutDraft | Mapping[str, Any]) -> WorkoutDraft:
    if isinstance(fields, WorkoutDraft):
        return fields
    if not isinstance(fields, Mapping):
        raise PlannerValidationError("Workout fields must be an object.")
    try:
        return WorkoutDraft.model_validate(dict(fields))
    except ValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error.get("loc", ())) or None
        raise PlannerValidationError(f"Invalid workout field {field}: {error.get('msg')}", field=field) from exc


class PlannerStore:
    """Canonical holder of the workout library and weekly plan."""

    def __init__(
        self,
        storage: KeyValueStorage,
        storage_key: str = DEFAULT_STORAGE_KEY,
        *,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_workout_id,
    ) -> None:
        self._storage = storage
        self._storage_key = storage_key
        self._clock = clock
        self._id_factory = id_factory
        self._snapshot = Snapshot()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    @property
    def storage_key(self) -> str:
        return self._storage_key

    @property
    def workouts(self) -> tuple[Workout, ...]:
        """Workout library, most recently created first."""
        return self._snapshot.workouts

    @property
    def plan_by_day(self) -> WeeklyPlan:
        return self._snapshot.plan_by_day

    def snapshot(self) -> Snapshot:
        return self._snapshot

    def find_workout(self, workout_id: str) -> Workout | None:
        """Look up a workout; ``None`` means the id is unknown or was deleted."""
        for workout in self._snapshot.workouts:
            if workout.id == workout_id:
                return workout
        return None

    def resolve_day(self, day: str) -> list[ResolvedAssignment]:
        """Pair each of ``day``'s entries with its workout (``None`` when dangling)."""
        self._require_day(day)
        return [
            ResolvedAssignment(day=day, index=index, workout_id=workout_id, workout=self.find_workout(workout_id))
            for index, workout_id in enumerate(self.plan_by_day[day])
        ]

    def resolve_plan(self) -> dict[str, list[ResolvedAssignment]]:
        return {day: self.resolve_day(day) for day in DAYS_OF_WEEK}

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> Snapshot:
        """Read and normalize the persisted snapshot, replacing in-memory state.

        Missing or unreadable data yields the default snapshot; this never
        raises for malformed content.
        """
        raw = self._storage.get(self._storage_key)
        self._snapshot = parse_snapshot(raw)
        logger.debug(
            "Loaded planner state: workouts=%d, assignments=%d",
            len(self._snapshot.workouts),
            sum(len(refs) for _, refs in self._snapshot.plan_by_day.items()),
        )
        return self._snapshot

    def save(self, snapshot: Snapshot | None = None) -> None:
        """Write the full snapshot (current state when omitted).

        Storage failures propagate; in-memory state only changes once the
        write has succeeded.
        """
        target = snapshot if snapshot is not None else self._snapshot
        self._storage.set(self._storage_key, json.dumps(target.to_storage()))
        self._snapshot = target

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def create_workout(self, fields: WorkoutDraft | Mapping[str, Any]) -> Workout:
        """Validate form-shaped input and add the workout at the front of the library."""
        draft = _coerce_draft(fields)

        name = (draft.name or "").strip()
        if not name:
            raise PlannerValidationError("Workout name is required.", field="name")

        workout = Workout(
            id=self._id_factory(),
            name=name,
            type=_parse_type(draft.type),
            duration_minutes=_parse_count(draft.duration_minutes, "durationMinutes"),
            sets=_parse_count(draft.sets, "sets"),
            reps=_parse_count(draft.reps, "reps"),
            notes=(draft.notes or "").strip(),
            created_at=self._clock(),
        )
        self.save(self._next(workouts=(workout, *self._snapshot.workouts)))
        logger.info("Created workout id=%s name=%r type=%s", workout.id, workout.name, workout.type.value)
        return workout

    def assign_workout(self, day: str, workout_id: str | None) -> None:
        """Append ``workout_id`` to ``day``; the same workout may appear repeatedly."""
        self._require_day(day)
        if workout_id is None or not str(workout_id).strip():
            raise PlannerValidationError("Select a workout to assign.", field="workoutId")
        if self.find_workout(workout_id) is None:
            raise PlannerValidationError("Selected workout no longer exists.", field="workoutId")

        plan = self.plan_by_day
        self.save(self._next(plan_by_day=plan.replace_day(day, (*plan[day], workout_id))))
        logger.info("Assigned workout id=%s to %s", workout_id, day)

    def unassign(self, day: str, index: int) -> bool:
        """Remove the entry at ``index`` from ``day``.

        Out-of-range (including negative) indexes are ignored and return ``False``.
        """
        self._require_day(day)
        refs = self.plan_by_day[day]
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(refs):
            logger.debug("Ignoring unassign for %s at index %r (entries=%d)", day, index, len(refs))
            return False

        remaining = refs[:index] + refs[index + 1 :]
        self.save(self._next(plan_by_day=self.plan_by_day.replace_day(day, remaining)))
        logger.info("Unassigned entry %d from %s", index, day)
        return True

    def delete_workout(self, workout_id: str) -> bool:
        """Remove a workout and every plan reference to it in one transition.

        Returns ``False`` when nothing referenced the id (no write happens).
        """
        workouts = tuple(workout for workout in self._snapshot.workouts if workout.id != workout_id)
        plan = self.plan_by_day.without_workout(workout_id)
        if len(workouts) == len(self._snapshot.workouts) and plan == self.plan_by_day:
            return False

        self.save(Snapshot(workouts=workouts, plan_by_day=plan))
        logger.info("Deleted workout id=%s", workout_id)
        return True

    def reset_all(self) -> None:
        """Clear the library and plan and remove the persisted record.

        Asking the user for confirmation is the caller's responsibility.
        """
        self._storage.delete(self._storage_key)
        self._snapshot = Snapshot()
        logger.info("Planner reset; storage key %s cleared", self._storage_key)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _next(
        self,
        *,
        workouts: tuple[Workout, ...] | None = None,
        plan_by_day: WeeklyPlan | None = None,
    ) -> Snapshot:
        return Snapshot(
            workouts=workouts if workouts is not None else self._snapshot.workouts,
            plan_by_day=plan_by_day if plan_by_day is not None else self._snapshot.plan_by_day,
        )

    @staticmethod
    def _require_day(day: str) -> None:
        if day not in DAYS_OF_WEEK:
            raise PlannerValidationError(
                f"Unknown day {day!r}; expected one of {', '.join(DAYS_OF_WEEK)}.", field="day"
            )
