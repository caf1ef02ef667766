"""Database session and base model setup."""
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from workout_planner.config import get_settings


settings = get_settings()


def _sqlite_connect_args(database_url: str) -> dict:
    """Create the parent directory of a file-backed SQLite database and return its connect args."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return {}
    if url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    # Sessions are opened in FastAPI's threadpool and used from async endpoints.
    return {"check_same_thread": False}


engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    future=True,
    connect_args=_sqlite_connect_args(settings.database_url),
)


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""


SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db():
    """FastAPI dependency yielding a transactional database session."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """Create the storage tables if they do not exist yet."""

    # Model registration happens on import.
    from workout_planner.models import database_models  # noqa: F401

    Base.metadata.create_all(bind=engine)
