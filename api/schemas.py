"""API-specific request and response models."""

from datetime import date, datetime
from pydantic import BaseModel
from typing import List, Optional, Union


class SessionResponse(BaseModel):
    """Anonymous identity for the rest of the session."""
    user_id: str


class CreateTeeTimeRequest(BaseModel):
    # Loosely typed so validation messages come from the booking layer.
    course: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    total_spots: Optional[Union[int, str]] = None


class RegisterCourseRequest(BaseModel):
    name: Optional[str] = None


class PlayerResponse(BaseModel):
    id: str
    display: str
    is_you: bool = False


class TeeTimeResponse(BaseModel):
    """One tee time card, with state derived for the calling user."""
    id: str
    course: str
    date: date
    time: str
    total_spots: int
    creator_id: str
    created_at: Optional[datetime] = None
    players: List[PlayerResponse]
    available_spots: int
    is_full: bool
    has_joined: bool
    is_past: bool
    show_claim: bool
    can_claim: bool
    spots_label: str
    claim_label: str
    date_display: str
    time_display: str


class CourseResponse(BaseModel):
    id: str
    name: str
    added_by: Optional[str] = None
    created_at: Optional[datetime] = None


class ErrorResponse(BaseModel):
    field: Optional[str] = None
    message: str
