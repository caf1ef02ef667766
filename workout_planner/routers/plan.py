"""API endpoints for the weekly plan."""
from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, HTTPException

from workout_planner.dependencies import NotifierDep, StoreDep
from workout_planner.models.domain import DAYS_OF_WEEK
from workout_planner.models.schemas import (
    AssignmentCreate,
    DayPlanResponse,
    PlanEntryResponse,
    ResetResponse,
    WeeklyPlanResponse,
)
from workout_planner.services.planner_store import PlannerStore


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plan", tags=["plan"])


def _day_response(store: PlannerStore, day: str) -> DayPlanResponse:
    entries = [PlanEntryResponse.from_resolved(entry) for entry in store.resolve_day(day)]
    return DayPlanResponse(day=day, count=len(entries), entries=entries)


@router.get("", response_model=WeeklyPlanResponse)
async def get_weekly_plan(store: StoreDep):
    """Return every day in order; entries pointing at deleted workouts are flagged ``missing``."""
    return WeeklyPlanResponse(days=[_day_response(store, day) for day in DAYS_OF_WEEK])


@router.post("/reset", response_model=ResetResponse)
async def reset_planner(
    store: StoreDep,
    notifier: NotifierDep,
    background_tasks: BackgroundTasks,
    confirm: bool = False,
):
    """
    Clear all workouts and the weekly plan.

    Args:
        confirm: Must be true; the reset cannot be undone
    """
    if not confirm:
        raise HTTPException(
            status_code=400,
            detail="Resetting clears all workouts and the weekly plan; pass confirm=true to proceed",
        )

    store.reset_all()
    background_tasks.add_task(notifier.send_event, "planner_reset", {})
    return ResetResponse(status="success", message="Planner reset")


@router.get("/{day}", response_model=DayPlanResponse)
async def get_day_plan(day: str, store: StoreDep):
    """Return one day's assignments."""
    return _day_response(store, day)


@router.post("/{day}/assignments", response_model=DayPlanResponse, status_code=201)
async def assign_workout(
    day: str,
    assignment: AssignmentCreate,
    store: StoreDep,
    notifier: NotifierDep,
    background_tasks: BackgroundTasks,
):
    """Append a workout to the end of ``day``'s sequence."""
    store.assign_workout(day, assignment.workout_id)
    background_tasks.add_task(
        notifier.send_event,
        "workout_assigned",
        {"day": day, "workoutId": assignment.workout_id},
    )
    return _day_response(store, day)


@router.delete("/{day}/assignments/{index}", response_model=DayPlanResponse)
async def unassign_workout(
    day: str,
    index: int,
    store: StoreDep,
    notifier: NotifierDep,
    background_tasks: BackgroundTasks,
):
    """Remove the entry at ``index``; an out-of-range index leaves the day unchanged."""
    if store.unassign(day, index):
        background_tasks.add_task(notifier.send_event, "workout_unassigned", {"day": day, "index": index})
    return _day_response(store, day)
