"""Derived display state for tee times and courses."""

from __future__ import annotations

from datetime import date as Date, datetime
from typing import Dict, Iterable, List, Optional, Union

from models import Course, TeeTime, parse_time_of_day

PLAYER_ID_DISPLAY_LENGTH = 12


def sort_tee_times(tee_times: Iterable[TeeTime]) -> List[TeeTime]:
    """Earliest start first."""
    return sorted(tee_times, key=lambda t: t.starts_at)


def sort_courses(courses: Iterable[Course]) -> List[Course]:
    return sorted(courses, key=lambda c: c.name)


def format_date(value: Union[Date, str, None]) -> str:
    """``2025-06-01`` -> ``Sun, June 1``."""
    if not value:
        return "N/A"
    if isinstance(value, str):
        value = Date.fromisoformat(value)
    return f"{value:%a}, {value:%B} {value.day}"


def format_time(value: Optional[str]) -> str:
    """``14:05`` -> ``2:05 PM``."""
    if not value:
        return "N/A"
    parsed = parse_time_of_day(value)
    hour = parsed.hour % 12 or 12
    suffix = "PM" if parsed.hour >= 12 else "AM"
    return f"{hour}:{parsed.minute:02d} {suffix}"


def short_player_id(player_id: str) -> str:
    return f"{player_id[:PLAYER_ID_DISPLAY_LENGTH]}..."


def spots_label(tee_time: TeeTime) -> str:
    return "Full" if tee_time.is_full else f"{tee_time.available_spots} Left"


def claim_label(tee_time: TeeTime, user_id: Optional[str]) -> str:
    return "You're In!" if tee_time.has_joined(user_id) else "Claim Spot"


def tee_time_state(
    tee_time: TeeTime,
    user_id: Optional[str],
    now: Optional[datetime] = None,
) -> Dict[str, object]:
    """Everything a client needs to render one tee time card for a user.

    The claim control is shown only while the tee time is upcoming, and is
    enabled only when there is room and the user is not already in.
    """
    is_past = tee_time.is_past(now)
    return {
        "available_spots": tee_time.available_spots,
        "is_full": tee_time.is_full,
        "has_joined": tee_time.has_joined(user_id),
        "is_past": is_past,
        "show_claim": not is_past,
        "can_claim": tee_time.can_claim(user_id),
        "spots_label": spots_label(tee_time),
        "claim_label": claim_label(tee_time, user_id),
        "date_display": format_date(tee_time.date),
        "time_display": format_time(tee_time.time),
    }
