"""Error types raised by the planner core."""
from __future__ import annotations


class PlannerError(Exception):
    """Base class for planner errors."""


class PlannerValidationError(PlannerError, ValueError):
    """User input violated a planner contract; state was left unchanged."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class StorageWriteError(PlannerError, RuntimeError):
    """Persisting the planner snapshot failed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Failed to write storage key {key!r}: {reason}")
        self.key = key
        self.reason = reason
