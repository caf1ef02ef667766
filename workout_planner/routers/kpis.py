"""Router exposing plan KPIs."""
from __future__ import annotations

from fastapi import APIRouter

from workout_planner.dependencies import StoreDep
from workout_planner.models.domain import KPISummary
from workout_planner.services.kpi import compute_kpis


router = APIRouter(prefix="/api/kpis", tags=["kpis"])


@router.get("", response_model=KPISummary)
async def get_kpis(store: StoreDep):
    """Return the KPI snapshot for the current library and plan."""
    return compute_kpis(store.workouts, store.plan_by_day)
