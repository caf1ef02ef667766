"""Print the weekly plan and KPI snapshot from persisted planner state."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from workout_planner.config import get_settings
from workout_planner.database import SessionLocal, init_db
from workout_planner.logging_config import configure_logging
from workout_planner.models.domain import DAYS_OF_WEEK
from workout_planner.models.schemas import describe_workout
from workout_planner.services.kpi import compute_kpis
from workout_planner.services.planner_store import PlannerStore
from workout_planner.services.storage import SqlKeyValueStorage


logger = logging.getLogger("scripts.planner_report")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Weekly workout plan report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Human-readable plan and KPIs
  python scripts/planner_report.py

  # Machine-readable output
  python scripts/planner_report.py --json

  # Wipe all workouts and the plan
  python scripts/planner_report.py --reset --yes
        """
    )
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("--reset", action="store_true", help="Clear all workouts and the weekly plan")
    parser.add_argument("--yes", action="store_true", help="Confirm a destructive action")
    return parser.parse_args(argv)


def render_text(store: PlannerStore) -> str:
    """Format the plan day by day followed by the KPI block."""
    kpis = compute_kpis(store.workouts, store.plan_by_day)
    lines: list[str] = []
    for day in DAYS_OF_WEEK:
        entries = store.resolve_day(day)
        lines.append(f"{day} ({len(entries)} assigned)")
        if not entries:
            lines.append("  No workouts assigned.")
        for entry in entries:
            if entry.workout is None:
                lines.append(f"  [{entry.index}] Deleted workout ({entry.workout_id})")
            else:
                lines.append(f"  [{entry.index}] {entry.workout.name} - {describe_workout(entry.workout)}")
    lines.append("")
    lines.append(f"Workouts created:    {kpis.total_workouts_defined}")
    lines.append(f"Assignments (week):  {kpis.total_assignments}")
    lines.append(f"Avg / day:           {kpis.avg_assignments_per_day:.1f}")
    return "\n".join(lines)


def render_json(store: PlannerStore) -> str:
    kpis = compute_kpis(store.workouts, store.plan_by_day)
    return json.dumps(
        {
            "snapshot": store.snapshot().to_storage(),
            "kpis": kpis.model_dump(by_alias=True),
        },
        indent=2,
    )


def run(args: argparse.Namespace, store: PlannerStore) -> int:
    """Execute the report against an already constructed store; returns the exit code."""
    store.load()

    if args.reset:
        if not args.yes:
            print("Refusing to reset without --yes (this cannot be undone).", file=sys.stderr)
            return 2
        store.reset_all()
        print("Planner reset.")
        return 0

    print(render_json(store) if args.json else render_text(store))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()
    init_db()

    db = SessionLocal()
    try:
        store = PlannerStore(SqlKeyValueStorage(db), get_settings().storage_key)
        return run(args, store)
    except Exception:
        logger.exception("Planner report failed")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
