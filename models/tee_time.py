from datetime import date as Date, datetime, time as Time
from pydantic import Field, field_validator, model_validator
from typing import List, Optional

from .base import BaseBookingModel

# Largest group a single tee accepts.
MAX_GROUP_SIZE = 4


def parse_time_of_day(value: str) -> Time:
    """Parse a 24h ``HH:MM`` string into a time."""
    return datetime.strptime(value.strip(), "%H:%M").time()


class TeeTime(BaseBookingModel):
    """A bookable slot at a course: fixed date and time, a player capacity,
    and the ordered list of users who hold a spot."""
    id: Optional[str] = None
    app_id: Optional[str] = None
    course: str = Field(..., min_length=1)
    date: Date
    time: str
    total_spots: int = Field(..., ge=1, le=MAX_GROUP_SIZE)
    players: List[str] = Field(default_factory=list)  # join order
    creator_id: str
    created_at: Optional[datetime] = None

    @field_validator('time')
    @classmethod
    def validate_time(cls, v):
        try:
            parsed = parse_time_of_day(v)
        except ValueError:
            raise ValueError(f"Time '{v}' must be a 24h HH:MM value")
        return parsed.strftime("%H:%M")

    @model_validator(mode='after')
    def validate_players(self):
        if len(set(self.players)) != len(self.players):
            raise ValueError("A player can hold only one spot per tee time")
        if self.creator_id not in self.players:
            raise ValueError(f"Creator {self.creator_id} must be one of the players")
        if len(self.players) > self.total_spots:
            raise ValueError(
                f"{len(self.players)} players exceed the {self.total_spots} available spots"
            )
        return self

    @property
    def starts_at(self) -> datetime:
        """Local, naive start instant."""
        return datetime.combine(self.date, parse_time_of_day(self.time))

    @property
    def available_spots(self) -> int:
        return self.total_spots - len(self.players)

    @property
    def is_full(self) -> bool:
        return self.available_spots <= 0

    def has_joined(self, user_id: Optional[str]) -> bool:
        """Check whether a user already holds a spot."""
        return bool(user_id) and user_id in self.players

    def is_past(self, now: Optional[datetime] = None) -> bool:
        """True once the start instant is behind ``now`` (local time)."""
        return self.starts_at < (now or datetime.now())

    def can_claim(self, user_id: Optional[str]) -> bool:
        return not (self.is_full or self.has_joined(user_id))
