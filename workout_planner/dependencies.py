"""FastAPI dependencies wiring the planner store and notifier."""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from workout_planner.config import get_settings
from workout_planner.database import get_db
from workout_planner.services.notification_service import NotificationService
from workout_planner.services.planner_store import PlannerStore
from workout_planner.services.storage import SqlKeyValueStorage


def get_planner_store(db: Annotated[Session, Depends(get_db)]) -> PlannerStore:
    """Build a store over the request's session, loaded from storage."""
    store = PlannerStore(SqlKeyValueStorage(db), get_settings().storage_key)
    store.load()
    return store


def get_notifier() -> NotificationService:
    return NotificationService()


StoreDep = Annotated[PlannerStore, Depends(get_planner_store)]
NotifierDep = Annotated[NotificationService, Depends(get_notifier)]
