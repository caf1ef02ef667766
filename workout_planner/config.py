"""Application configuration management."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralised application settings derived from environment variables."""

    database_url: str = Field(
        default="sqlite:///./data/workout_planner.db",
        description="SQLAlchemy-compatible database URL backing the key-value storage.",
    )
    storage_key: str = Field(
        default="workoutPlanner_v1",
        min_length=1,
        description="Storage key holding the persisted planner snapshot.",
    )
    app_host: str = Field(default="0.0.0.0")
    app_port: int = Field(default=8000, ge=1, le=65535)

    debug: bool = Field(default=False)

    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("logs"))
    log_max_bytes: int = Field(default=1_048_576, ge=1024)
    log_backup_count: int = Field(default=3, ge=0)
    library_log_level: str = Field(
        default="WARNING",
        description="Level for httpx, httpcore and sqlalchemy.engine loggers.",
    )

    webhook_url: str | None = Field(
        default=None,
        description="Outbound webhook (e.g. a Zapier catch hook) receiving planner events.",
    )
    webhook_timeout_seconds: float = Field(default=4.0, gt=0)
    webhook_fail_silently: bool = Field(default=True)
    app_name: str = Field(default="Workout-Planner-App")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level", "library_log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        valid = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        upper = value.upper()
        if upper not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(sorted(valid))}")
        return upper

    @field_validator("webhook_url")
    @classmethod
    def validate_webhook_url(cls, value: str | None) -> str | None:
        """Treat a blank webhook URL as "not configured"."""

        if value is None or not value.strip():
            return None
        cleaned = value.strip()
        if not cleaned.lower().startswith(("http://", "https://")):
            raise ValueError("WEBHOOK_URL must be an http(s) URL")
        return cleaned


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance so it can be reused across the app."""

    settings = Settings()
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    return settings
