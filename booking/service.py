"""Booking operations: post a tee time, claim a spot, register a course."""

import logging
from contextlib import contextmanager
from datetime import date as Date, datetime
from typing import Any, Callable, Iterator, List, Optional, Tuple

import asyncpg

from models import Course, TeeTime
from database.db_manager import DatabaseManager
from database.exceptions import CapacityError, DatabaseError, NotFoundError
from booking.errors import (
    PastTeeTimeError,
    StoreUnavailableError,
    TeeTimeFullError,
    TeeTimeNotFoundError,
)
from booking.validation import validate_new_course, validate_new_tee_time
from booking.views import sort_courses, sort_tee_times

logger = logging.getLogger(__name__)

# Anything that means "the store could not do it right now".
STORE_FAILURES = (DatabaseError, asyncpg.PostgresError, asyncpg.InterfaceError, OSError)

COURSE_SAVE_FAILED = "Could not save the new course. Please try again."
TEE_TIME_SAVE_FAILED = "Could not post the tee time. Please try again."
CLAIM_FAILED = "Could not claim the spot. Please try again."
LOAD_FAILED = "Could not load data. Please try again."


@contextmanager
def store_errors(message: str) -> Iterator[None]:
    """Log a store failure and re-raise it as StoreUnavailableError(message)."""
    try:
        yield
    except (NotFoundError, CapacityError):
        raise
    except STORE_FAILURES as exc:
        logger.exception(message)
        raise StoreUnavailableError(message) from exc


class BookingService:
    """Tee time operations over an injected DatabaseManager."""

    def __init__(self, db: DatabaseManager, *, clock: Callable[[], datetime] = datetime.now):
        self._db = db
        self._clock = clock

    # ================================================================
    # Read
    # ================================================================

    async def list_tee_times(self) -> List[TeeTime]:
        with store_errors(LOAD_FAILED):
            tee_times = await self._db.tee_times.list_tee_times()
        return sort_tee_times(tee_times)

    async def list_courses(self) -> List[Course]:
        with store_errors(LOAD_FAILED):
            courses = await self._db.courses.list_courses()
        return sort_courses(courses)

    # ================================================================
    # Write
    # ================================================================

    async def register_course(self, name: Optional[str], user_id: str) -> Tuple[Course, bool]:
        """Register a course name. An existing name is reused, never duplicated.

        Returns (course, created).
        """
        course = validate_new_course(name, user_id)
        with store_errors(COURSE_SAVE_FAILED):
            saved, created = await self._db.courses.register_course(course)
        if created:
            logger.info("Course '%s' registered by %s", saved.name, user_id)
        return saved, created

    async def create_tee_time(
        self,
        *,
        course: Optional[str],
        date: Any,
        time: Optional[str],
        total_spots: Any,
        creator_id: str,
        today: Optional[Date] = None,
    ) -> TeeTime:
        """Post a tee time with the creator holding the first spot.

        The course is registered first if its name is new.
        """
        tee_time = validate_new_tee_time(
            course=course,
            date=date,
            time=time,
            total_spots=total_spots,
            creator_id=creator_id,
            today=today or self._clock().date(),
        )
        await self.register_course(tee_time.course, creator_id)

        with store_errors(TEE_TIME_SAVE_FAILED):
            saved = await self._db.tee_times.create_tee_time(tee_time)
        logger.info(
            "Tee time %s posted at %s on %s %s (%d spots)",
            saved.id, saved.course, saved.date, saved.time, saved.total_spots,
        )
        return saved

    async def claim_spot(self, tee_time_id: str, user_id: str) -> TeeTime:
        """Reserve one spot for a user.

        Claiming a spot already held returns the tee time unchanged. Claims
        on tee times that have started or are full are rejected.
        """
        with store_errors(CLAIM_FAILED):
            current = await self._db.tee_times.get_tee_time(tee_time_id)
        if current is None:
            raise TeeTimeNotFoundError("That tee time no longer exists.")
        if current.has_joined(user_id):
            return current
        if current.is_past(self._clock()):
            raise PastTeeTimeError("This tee time has already started.")

        try:
            with store_errors(CLAIM_FAILED):
                updated = await self._db.tee_times.claim_spot(tee_time_id, user_id)
        except NotFoundError as e:
            raise TeeTimeNotFoundError("That tee time no longer exists.") from e
        except CapacityError as e:
            logger.info("Claim by %s on full tee time %s rejected", user_id, tee_time_id)
            raise TeeTimeFullError("This tee time is full.") from e
        logger.info("User %s claimed a spot on tee time %s", user_id, tee_time_id)
        return updated
