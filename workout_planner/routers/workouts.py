"""API endpoints for the workout library."""
from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, HTTPException

from workout_planner.dependencies import NotifierDep, StoreDep
from workout_planner.models.schemas import WorkoutDraft, WorkoutResponse


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/workouts", tags=["workouts"])


@router.get("", response_model=list[WorkoutResponse])
async def list_workouts(store: StoreDep):
    """Return the workout library, most recently created first."""
    return [WorkoutResponse.from_workout(workout) for workout in store.workouts]


@router.post("", response_model=WorkoutResponse, status_code=201)
async def create_workout(
    draft: WorkoutDraft,
    store: StoreDep,
    notifier: NotifierDep,
    background_tasks: BackgroundTasks,
):
    """
    Create a workout template.

    Args:
        draft: Form input (name required; numeric fields may be blank)

    Returns:
        WorkoutResponse: The stored workout with its display summary
    """
    workout = store.create_workout(draft)
    background_tasks.add_task(
        notifier.send_event,
        "workout_created",
        {"workoutId": workout.id, "name": workout.name, "type": workout.type.value},
    )
    return WorkoutResponse.from_workout(workout)


@router.delete("/{workout_id}")
async def delete_workout(
    workout_id: str,
    store: StoreDep,
    notifier: NotifierDep,
    background_tasks: BackgroundTasks,
) -> dict:
    """
    Delete a workout and clear every weekly assignment referencing it.

    Raises:
        HTTPException: 404 if neither the library nor the plan references the id
    """
    if not store.delete_workout(workout_id):
        raise HTTPException(status_code=404, detail="Workout not found")

    background_tasks.add_task(notifier.send_event, "workout_deleted", {"workoutId": workout_id})
    return {"status": "success", "message": "Workout deleted"}
