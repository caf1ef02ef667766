"""Pytest configuration for global fixtures and logging setup."""
from __future__ import annotations

import itertools
import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

_TMP_DIR = Path(tempfile.mkdtemp(prefix="workout-planner-tests-"))

os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'planner.db'}"
os.environ["LOG_DIR"] = str(_TMP_DIR / "logs")
os.environ["STORAGE_KEY"] = "workoutPlanner_v1"
os.environ.pop("WEBHOOK_URL", None)

from workout_planner.logging_config import configure_logging

configure_logging()

from workout_planner.database import SessionLocal, init_db
from workout_planner.main import app
from workout_planner.models.database_models import StoredValue
from workout_planner.services.planner_store import PlannerStore
from workout_planner.services.storage import InMemoryKeyValueStorage

init_db()

STORAGE_KEY = "workoutPlanner_v1"


@pytest.fixture(scope="session")
def test_client() -> TestClient:
    """Provide a FastAPI test client."""

    return TestClient(app)


@pytest.fixture(autouse=True)
def clean_storage():
    """Start every test with an empty storage table."""

    db = SessionLocal()
    try:
        db.query(StoredValue).delete()
        db.commit()
    finally:
        db.close()
    yield


@pytest.fixture
def fixed_clock():
    """Deterministic, strictly increasing UTC timestamps."""

    start = datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)
    ticks = itertools.count()
    return lambda: start + timedelta(seconds=next(ticks))


@pytest.fixture
def memory_storage() -> InMemoryKeyValueStorage:
    return InMemoryKeyValueStorage()


@pytest.fixture
def store(memory_storage: InMemoryKeyValueStorage, fixed_clock) -> PlannerStore:
    """A loaded store over in-memory storage with predictable ids."""

    ids = (f"w{n}" for n in itertools.count(1))
    planner = PlannerStore(memory_storage, STORAGE_KEY, clock=fixed_clock, id_factory=lambda: next(ids))
    planner.load()
    return planner
