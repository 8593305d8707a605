import asyncio
import pytest
from datetime import date, datetime, timedelta
from unittest.mock import AsyncMock

from booking import (
    BookingService,
    InvalidFieldError,
    PastTeeTimeError,
    StoreUnavailableError,
    TeeTimeFullError,
    TeeTimeNotFoundError,
)
from booking.validation import validate_new_tee_time
from booking.views import (
    format_date,
    format_time,
    short_player_id,
    sort_courses,
    sort_tee_times,
    tee_time_state,
)
from database.exceptions import IntegrityError
from models import Course, TeeTime

NOW = datetime(2025, 5, 31, 12, 0)
TODAY = NOW.date()
TOMORROW = TODAY + timedelta(days=1)
YESTERDAY = TODAY - timedelta(days=1)


def _service(fake_db) -> BookingService:
    return BookingService(fake_db, clock=lambda: NOW)


async def _post(service, creator="u1", **overrides):
    fields = dict(course="Pine Valley", date=TOMORROW.isoformat(), time="14:00", total_spots=4)
    fields.update(overrides)
    return await service.create_tee_time(creator_id=creator, **fields)


# ================================================================
# Validation
# ================================================================

@pytest.mark.parametrize("field_name", ["course", "date", "time", "total_spots"])
def test_validation_names_missing_field(field_name):
    fields = dict(course="Pine Valley", date=TOMORROW, time="14:00", total_spots=4)
    fields[field_name] = "" if field_name != "total_spots" else None

    with pytest.raises(InvalidFieldError) as exc:
        validate_new_tee_time(creator_id="u1", today=TODAY, **fields)
    assert exc.value.field == field_name
    assert exc.value.message == "Please fill out all fields."


def test_validation_today_is_allowed_regardless_of_time():
    t = validate_new_tee_time(course="Pine Valley", date=TODAY.isoformat(), time="00:00",
                              total_spots=2, creator_id="u1", today=TODAY)
    assert t.date == TODAY


def test_validation_rejects_bad_values():
    with pytest.raises(InvalidFieldError) as exc:
        validate_new_tee_time(course="Pine Valley", date="06/01/2025", time="14:00",
                              total_spots=4, creator_id="u1", today=TODAY)
    assert exc.value.field == "date"

    with pytest.raises(InvalidFieldError) as exc:
        validate_new_tee_time(course="Pine Valley", date=TOMORROW, time="25:00",
                              total_spots=4, creator_id="u1", today=TODAY)
    assert exc.value.field == "time"

    with pytest.raises(InvalidFieldError) as exc:
        validate_new_tee_time(course="Pine Valley", date=TOMORROW, time="14:00",
                              total_spots=0, creator_id="u1", today=TODAY)
    assert exc.value.field == "total_spots"


def test_validation_trims_course_name():
    t = validate_new_tee_time(course="  Pine Valley ", date=TOMORROW, time="14:00",
                              total_spots="3", creator_id="u1", today=TODAY)
    assert t.course == "Pine Valley"
    assert t.total_spots == 3


# ================================================================
# Create
# ================================================================

@pytest.mark.asyncio
async def test_create_puts_creator_in_players(fake_db):
    t = await _post(_service(fake_db))

    assert t.id is not None
    assert t.players == ["u1"]
    assert t.creator_id == "u1"
    assert t.available_spots == 3


@pytest.mark.asyncio
async def test_create_in_past_is_rejected_without_writes(fake_db):
    with pytest.raises(InvalidFieldError) as exc:
        await _post(_service(fake_db), date=YESTERDAY.isoformat())

    assert exc.value.field == "date"
    assert exc.value.message == "Cannot book a tee time in the past."
    assert fake_db.tee_times.create_calls == 0
    assert fake_db.courses.records == {}


@pytest.mark.asyncio
async def test_create_registers_new_course_once(fake_db):
    service = _service(fake_db)
    await _post(service, course="Augusta National")
    await _post(service, creator="u2", course="Augusta National")

    assert list(fake_db.courses.records) == ["Augusta National"]
    assert fake_db.courses.records["Augusta National"].added_by == "u1"


@pytest.mark.asyncio
async def test_create_course_failure_aborts(fake_db):
    fake_db.courses.register_course = AsyncMock(side_effect=OSError("connection refused"))

    with pytest.raises(StoreUnavailableError) as exc:
        await _post(_service(fake_db))
    assert str(exc.value) == "Could not save the new course. Please try again."
    assert fake_db.tee_times.create_calls == 0


@pytest.mark.asyncio
async def test_create_store_failure_is_generic(fake_db):
    fake_db.tee_times.create_tee_time = AsyncMock(side_effect=IntegrityError("check violation"))
    with pytest.raises(StoreUnavailableError) as exc:
        await _post(_service(fake_db))
    assert "try again" in str(exc.value)


# ================================================================
# Claim
# ================================================================

@pytest.mark.asyncio
async def test_pine_valley_scenario(fake_db):
    service = _service(fake_db)
    t = await _post(service)
    assert t.players == ["u1"]
    assert t.available_spots == 3

    t = await service.claim_spot(t.id, "u2")
    assert t.players == ["u1", "u2"]
    assert t.available_spots == 2

    t = await service.claim_spot(t.id, "u1")
    assert t.players == ["u1", "u2"]


@pytest.mark.asyncio
async def test_claim_is_idempotent(fake_db):
    service = _service(fake_db)
    t = await _post(service)
    once = await service.claim_spot(t.id, "u2")
    twice = await service.claim_spot(t.id, "u2")
    assert once.players == twice.players == ["u1", "u2"]


@pytest.mark.asyncio
async def test_claim_full_is_rejected(fake_db):
    service = _service(fake_db)
    t = await _post(service, total_spots=2)
    await service.claim_spot(t.id, "u2")

    with pytest.raises(TeeTimeFullError):
        await service.claim_spot(t.id, "u3")
    assert fake_db.tee_times.records[t.id].players == ["u1", "u2"]


@pytest.mark.asyncio
async def test_claim_missing_tee_time(fake_db):
    with pytest.raises(TeeTimeNotFoundError):
        await _service(fake_db).claim_spot("nope", "u2")


@pytest.mark.asyncio
async def test_claim_after_start_is_rejected(fake_db):
    t = await _post(_service(fake_db), time="13:00")
    later = BookingService(fake_db, clock=lambda: datetime.combine(TOMORROW, datetime.min.time()) + timedelta(hours=14))

    with pytest.raises(PastTeeTimeError):
        await later.claim_spot(t.id, "u2")
    # Already-joined players still get the record back.
    assert (await later.claim_spot(t.id, "u1")).players == ["u1"]


@pytest.mark.asyncio
async def test_concurrent_claims_never_overbook(fake_db):
    # Runs against the in-memory store. The SQL guard is checked in test_database.py.
    service = _service(fake_db)
    t = await _post(service, total_spots=3)

    results = await asyncio.gather(
        *(service.claim_spot(t.id, f"u{i}") for i in range(2, 8)),
        return_exceptions=True,
    )

    players = fake_db.tee_times.records[t.id].players
    assert len(players) == 3
    assert len(set(players)) == 3
    assert sum(isinstance(r, TeeTimeFullError) for r in results) == 4


# ================================================================
# Courses
# ================================================================

@pytest.mark.asyncio
async def test_register_course_twice_stores_one(fake_db):
    service = _service(fake_db)
    first, created_first = await service.register_course("Pine Valley", "u1")
    second, created_second = await service.register_course("Pine Valley", "u2")

    assert created_first and not created_second
    assert first.id == second.id
    assert len(fake_db.courses.records) == 1


@pytest.mark.asyncio
async def test_register_course_is_case_sensitive(fake_db):
    service = _service(fake_db)
    await service.register_course("Pine Valley", "u1")
    await service.register_course("pine valley", "u1")
    assert len(fake_db.courses.records) == 2


@pytest.mark.asyncio
async def test_register_blank_course_rejected(fake_db):
    with pytest.raises(InvalidFieldError):
        await _service(fake_db).register_course("   ", "u1")


# ================================================================
# Views
# ================================================================

def _tt(day, at, players=("u1",), spots=4):
    return TeeTime(course="Pine Valley", date=day, time=at, total_spots=spots,
                   players=list(players), creator_id=players[0])


def test_sort_tee_times_by_date_then_time():
    ten = _tt(date(2025, 6, 1), "10:00")
    nine = _tt(date(2025, 6, 1), "09:00")
    earlier_day = _tt(date(2025, 5, 31), "18:00")
    assert sort_tee_times([ten, nine, earlier_day]) == [earlier_day, nine, ten]


def test_sort_courses_by_name():
    courses = [Course(name="Pine Valley"), Course(name="Augusta National")]
    assert [c.name for c in sort_courses(courses)] == ["Augusta National", "Pine Valley"]


def test_format_helpers():
    assert format_date("2025-06-01") == "Sun, June 1"
    assert format_date(None) == "N/A"
    assert format_time("14:05") == "2:05 PM"
    assert format_time("00:30") == "12:30 AM"
    assert format_time("12:00") == "12:00 PM"
    assert format_time("") == "N/A"
    assert short_player_id("abcdefghijklmnop") == "abcdefghijkl..."


def test_tee_time_state_controls():
    t = _tt(date(2025, 6, 1), "14:00", players=("u1", "u2"), spots=2)
    before = datetime(2025, 6, 1, 13, 0)

    state = tee_time_state(t, "u3", before)
    assert state["is_full"] and not state["can_claim"] and state["show_claim"]
    assert state["spots_label"] == "Full"
    assert state["claim_label"] == "Claim Spot"

    state = tee_time_state(t, "u2", datetime(2025, 6, 1, 15, 0))
    assert state["is_past"] and not state["show_claim"]
    assert state["claim_label"] == "You're In!"

    open_t = _tt(date(2025, 6, 1), "14:00")
    assert tee_time_state(open_t, "u9", before)["spots_label"] == "3 Left"
