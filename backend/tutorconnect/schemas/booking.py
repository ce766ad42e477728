# backend/tutorconnect/schemas/booking.py
"""
Booking schemas.

``BookingRequestCreate`` is the payload of the "create booking" action.
Only presence and basic types are validated; dates and times are kept
exactly as the booking form sent them.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, Field

from ..core.enums import BookingStatus
from ._strict_base import RecordModel, StrictRequestModel
from .base import Money


class BookingRequestCreate(StrictRequestModel):
    """Request to reserve a tutor's time."""

    tutor_id: Optional[str] = Field(None, description="Opaque tutor identifier, if known")
    tutor_name: str
    student_name: str
    student_email: str
    subject: str
    requested_date: str
    requested_time: str
    duration_minutes: int = Field(
        ...,
        validation_alias=AliasChoices("duration_minutes", "duration"),
        description="Session length in minutes",
    )
    hourly_rate: Money
    message: Optional[str] = ""


class BookingResponse(RecordModel):
    id: str
    tutor_id: Optional[str] = None
    tutor_name: str
    student_name: str
    student_email: str
    subject: str
    requested_date: str
    requested_time: str
    duration_minutes: int
    hourly_rate: Money
    total_cost: Money
    message: Optional[str] = None
    status: BookingStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
