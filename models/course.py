from datetime import datetime
from pydantic import Field, field_validator
from typing import Optional

from .base import BaseBookingModel


class Course(BaseBookingModel):
    """A registered golf course name that tee times can be posted against."""
    id: Optional[str] = None
    app_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    added_by: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Course name cannot be blank")
        return v
