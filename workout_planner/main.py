"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from workout_planner.database import init_db
from workout_planner.exceptions import PlannerValidationError, StorageWriteError
from workout_planner.logging_config import configure_logging
from workout_planner.routers import kpis, plan, workouts


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    init_db()
    yield


app = FastAPI(title="Workout Planner API", lifespan=lifespan)


@app.exception_handler(PlannerValidationError)
async def planner_validation_error_handler(request: Request, exc: PlannerValidationError) -> JSONResponse:
    """Surface user-input violations as 400s; state was left unchanged."""
    return JSONResponse(status_code=400, content={"detail": exc.message, "field": exc.field})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies (wrong JSON types) are user-input errors like any other."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query")]
    field = location[0] if location else None
    return JSONResponse(status_code=400, content={"detail": first.get("msg", "Invalid request"), "field": field})


@app.exception_handler(StorageWriteError)
async def storage_write_error_handler(request: Request, exc: StorageWriteError) -> JSONResponse:
    """A failed write must never look like a save."""
    logger.error("Storage write failed for %s %s: %s", request.method, request.url.path, exc.reason)
    return JSONResponse(status_code=503, content={"detail": "Planner state could not be saved"})


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Simple health probe for liveness checks."""
    return {"status": "ok"}


# Include routers
app.include_router(workouts.router)
app.include_router(plan.router)
app.include_router(kpis.router)
