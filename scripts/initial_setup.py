"""Create the planner storage tables."""
from workout_planner.config import get_settings
from workout_planner.database import init_db


def main() -> None:
    init_db()
    print("Database initialised at", get_settings().database_url)


if __name__ == "__main__":
    main()
