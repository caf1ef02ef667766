"""Key-value storage backends for the planner snapshot."""
from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from workout_planner.exceptions import StorageWriteError
from workout_planner.models.database_models import StoredValue


logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Synchronous string store with no cross-key transactions."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemoryKeyValueStorage:
    """Dict-backed storage, handy for tests and one-off scripts."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class SqlKeyValueStorage:
    """Storage backed by the ``planner_storage`` table.

    Every write is committed immediately so a successful ``set`` means the
    value is durable. On failure the session is rolled back and the error is
    re-raised as ``StorageWriteError``.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, key: str) -> str | None:
        record = self._session.get(StoredValue, key)
        return record.value if record is not None else None

    def set(self, key: str, value: str) -> None:
        try:
            record = self._session.get(StoredValue, key)
            if record is None:
                self._session.add(StoredValue(key=key, value=value))
            else:
                record.value = value
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.exception("Failed to persist storage key %s", key)
            raise StorageWriteError(key, str(exc)) from exc

    def delete(self, key: str) -> None:
        try:
            record = self._session.get(StoredValue, key)
            if record is not None:
                self._session.delete(record)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.exception("Failed to delete storage key %s", key)
            raise StorageWriteError(key, str(exc)) from exc
