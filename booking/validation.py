"""Validation of new tee time submissions.

Checks run in the order a user fills in the form, and the first failure
wins. Nothing here touches the store.
"""

from datetime import date as Date
from typing import Any, Optional

from pydantic import ValidationError

from models import Course, TeeTime
from booking.errors import InvalidFieldError

MISSING_FIELDS_MESSAGE = "Please fill out all fields."
PAST_DATE_MESSAGE = "Cannot book a tee time in the past."

REQUIRED_FIELDS = ("course", "date", "time", "total_spots")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def clean_course_name(name: Optional[str]) -> str:
    """Trim a course name, rejecting blanks."""
    if _is_blank(name):
        raise InvalidFieldError("course", MISSING_FIELDS_MESSAGE)
    return name.strip()


def parse_tee_date(value: Any) -> Date:
    if isinstance(value, Date):
        return value
    try:
        return Date.fromisoformat(str(value).strip())
    except ValueError:
        raise InvalidFieldError("date", f"Date '{value}' must be in YYYY-MM-DD form")


def validate_new_tee_time(
    *,
    course: Optional[str],
    date: Any,
    time: Optional[str],
    total_spots: Any,
    creator_id: str,
    today: Optional[Date] = None,
) -> TeeTime:
    """Build an unsaved TeeTime with the creator as its only player.

    Raises InvalidFieldError naming the first bad field. A date before
    ``today`` (defaults to the local calendar day) is rejected; the
    time-of-day is not considered for that check.
    """
    submitted = {"course": course, "date": date, "time": time, "total_spots": total_spots}
    for field_name in REQUIRED_FIELDS:
        if _is_blank(submitted[field_name]):
            raise InvalidFieldError(field_name, MISSING_FIELDS_MESSAGE)

    tee_date = parse_tee_date(date)
    if tee_date < (today or Date.today()):
        raise InvalidFieldError("date", PAST_DATE_MESSAGE)

    try:
        return TeeTime(
            course=clean_course_name(course),
            date=tee_date,
            time=time,
            total_spots=total_spots,
            players=[creator_id],
            creator_id=creator_id,
        )
    except ValidationError as e:
        error = e.errors()[0]
        field_name = str(error["loc"][0]) if error["loc"] else "players"
        raise InvalidFieldError(field_name, error["msg"]) from e


def validate_new_course(name: Optional[str], added_by: str) -> Course:
    """Build an unsaved Course from a submitted name."""
    try:
        return Course(name=clean_course_name(name), added_by=added_by)
    except ValidationError as e:
        raise InvalidFieldError("course", e.errors()[0]["msg"]) from e
