"""Run the planner API with uvicorn using configured host and port."""
from __future__ import annotations

import argparse

import uvicorn

from workout_planner.config import get_settings


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the Workout Planner API")
    parser.add_argument("--host", default=settings.app_host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.app_port, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    uvicorn.run(
        "workout_planner.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=get_settings().log_level.lower(),
    )


if __name__ == "__main__":
    main()
