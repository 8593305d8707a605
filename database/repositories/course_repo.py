"""CRUD operations for the bookings.courses registry."""

import asyncpg
from typing import List, Tuple

from models import Course
from database.converters import course_from_row, course_to_row
from database.exceptions import IntegrityError, NotFoundError


class CourseRepositoryDB:
    """Async CRUD for the course registry within one app namespace."""

    def __init__(self, pool: asyncpg.Pool, app_id: str):
        self._pool = pool
        self._app_id = app_id

    # ================================================================
    # Read
    # ================================================================

    async def list_courses(self) -> List[Course]:
        """All registered courses, ordered by name."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                "SELECT * FROM bookings.courses WHERE app_id = $1 ORDER BY name",
                self._app_id,
            )
            return [course_from_row(r) for r in rows]

    # ================================================================
    # Create
    # ================================================================

    async def register_course(self, course: Course) -> Tuple[Course, bool]:
        """Insert a course unless one with the same name exists.

        Returns (course, created). The unique (app_id, name) constraint makes
        concurrent registrations of one name settle on a single record.
        """
        data = course_to_row(course)
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO bookings.courses (app_id, name, added_by)
                       VALUES ($1, $2, $3)
                       ON CONFLICT ON CONSTRAINT courses_app_name_key DO NOTHING
                       RETURNING *""",
                    self._app_id, data["name"], data["added_by"],
                )
                if row:
                    return course_from_row(row), True

                row = await conn.fetchrow(
                    "SELECT * FROM bookings.courses WHERE app_id = $1 AND name = $2",
                    self._app_id, data["name"],
                )
                if not row:
                    raise NotFoundError(f"Course '{course.name}' vanished after conflict")
                return course_from_row(row), False
        except asyncpg.CheckViolationError as e:
            raise IntegrityError(str(e)) from e
