"""Register course names from a JSON file into the course registry.

The file holds either a list of names or a list of {"name": ...} objects.
Names already registered are left alone.

    python3 data/load_courses.py data/courses.json [added_by]
"""

import asyncio
import json
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from api.config import DEFAULT_APP_ID
from booking import BookingService, InvalidFieldError
from database.connection import DatabasePool
from database.db_manager import DatabaseManager


def course_names(data) -> list:
    """Pull course names out of the loaded JSON, in file order."""
    return [entry["name"] if isinstance(entry, dict) else entry for entry in data]


async def load_courses(courses_path: str, added_by: str, dsn: str = None, app_id: str = DEFAULT_APP_ID):
    with open(courses_path) as f:
        names = course_names(json.load(f))

    print(f"Loaded {len(names)} course names from JSON")

    pool = DatabasePool()
    await pool.initialize(dsn=dsn)
    await pool.initialize_schema()
    service = BookingService(DatabaseManager(pool.pool, app_id))

    try:
        created = 0
        for name in names:
            try:
                course, is_new = await service.register_course(name, added_by)
            except InvalidFieldError as e:
                print(f"  SKIP: {name!r} ({e.message})")
                continue
            if is_new:
                created += 1
                print(f"  Created course: {course.name} ({course.id})")
            else:
                print(f"  Course exists: {course.name} ({course.id})")

        print(f"\nDone: {created} courses created")
    finally:
        await pool.close()


def main():
    if len(sys.argv) < 2:
        print("Usage: python data/load_courses.py <courses.json> [added_by]")
        sys.exit(1)

    courses_path = sys.argv[1]
    added_by = sys.argv[2] if len(sys.argv) > 2 else "seed"

    dsn = os.environ.get("DATABASE_URL")
    app_id = os.environ.get("APP_ID") or DEFAULT_APP_ID

    asyncio.run(load_courses(courses_path, added_by, dsn, app_id))


if __name__ == "__main__":
    main()
