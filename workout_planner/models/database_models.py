"""SQLAlchemy ORM models backing the planner's key-value storage."""
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from workout_planner.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredValue(Base):
    """One persisted key-value record (the planner keeps its whole snapshot under one key)."""

    __tablename__ = "planner_storage"

    key: Mapped[str] = mapped_column(String(200), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
