"""Logging setup for the planner API and scripts.

Planner modules log to the console and a size-rotated file. HTTP client and
SQL engine loggers get their own (quieter) level so webhook retries and
statement echo do not drown out planner events; ``DEBUG=true`` lets SQL echo
through.
"""
from __future__ import annotations

from logging.config import dictConfig
from pathlib import Path

from pydantic import ValidationError

from workout_planner.config import Settings, get_settings

LOG_FILE_NAME = "workout_planner.log"
LIBRARY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")

_configured = False


def build_logging_config(settings: Settings) -> dict:
    """Return the ``dictConfig`` mapping for the given settings."""
    level = settings.log_level
    library_levels = {name: settings.library_log_level for name in LIBRARY_LOGGERS}
    if settings.debug:
        library_levels["sqlalchemy.engine"] = "INFO"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": level,
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": str(settings.log_dir / LOG_FILE_NAME),
                "maxBytes": settings.log_max_bytes,
                "backupCount": settings.log_backup_count,
                "encoding": "utf-8",
                "formatter": "standard",
                "level": level,
            },
        },
        "loggers": {
            name: {"level": library_level, "propagate": True}
            for name, library_level in library_levels.items()
        },
        "root": {
            "level": level,
            "handlers": ["console", "file"],
        },
    }


def configure_logging() -> None:
    """Configure logging once per process."""

    global _configured
    if _configured:
        return

    try:
        settings = get_settings()
    except ValidationError:
        # Broken environment: log with defaults so the failure itself is visible.
        settings = Settings.model_construct(
            log_level="INFO",
            log_dir=Path("logs"),
            log_max_bytes=1_048_576,
            log_backup_count=3,
            library_log_level="WARNING",
            debug=False,
        )
    settings.log_dir.mkdir(parents=True, exist_ok=True)

    dictConfig(build_logging_config(settings))
    _configured = True
