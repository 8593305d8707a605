"""Conversion between asyncpg database rows and Pydantic domain models.

Centralizes the mapping between the bookings schema columns and the
models. Dates and times are native DATE/TIME columns in the store and
ISO date / ``HH:MM`` strings on the models.
"""

from typing import Any, Dict

from models import Course, TeeTime, parse_time_of_day


# ================================================================
# Row -> Model (reads)
# ================================================================

def course_from_row(row) -> Course:
    """bookings.courses row -> Course model."""
    return Course(
        id=str(row["id"]),
        app_id=row["app_id"],
        name=row["name"],
        added_by=row["added_by"],
        created_at=row["created_at"],
    )


def tee_time_from_row(row) -> TeeTime:
    """bookings.tee_times row -> TeeTime model."""
    return TeeTime(
        id=str(row["id"]),
        app_id=row["app_id"],
        course=row["course"],
        date=row["tee_date"],
        time=row["tee_time"].strftime("%H:%M"),
        total_spots=row["total_spots"],
        players=list(row["players"] or []),
        creator_id=row["creator_id"],
        created_at=row["created_at"],
    )


# ================================================================
# Model -> Row (writes)
# ================================================================

def course_to_row(course: Course) -> Dict[str, Any]:
    """Course model -> dict of column values (id and created_at are store-assigned)."""
    return {
        "name": course.name,
        "added_by": course.added_by,
    }


def tee_time_to_row(tee_time: TeeTime) -> Dict[str, Any]:
    """TeeTime model -> dict of column values (id and created_at are store-assigned)."""
    return {
        "course": tee_time.course,
        "tee_date": tee_time.date,
        "tee_time": parse_time_of_day(tee_time.time),
        "total_spots": tee_time.total_spots,
        "players": list(tee_time.players),
        "creator_id": tee_time.creator_id,
    }
