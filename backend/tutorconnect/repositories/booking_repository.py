# backend/tutorconnect/repositories/booking_repository.py
"""
Booking Repository for the TutorConnect workflow engine.

Handles the booking ledger's data access: lookups by party and the
status transition write.
"""

from datetime import datetime, timezone
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..core.enums import BookingStatus
from ..models.booking import Booking
from .base_repository import BaseRepository


class BookingRepository(BaseRepository[Booking]):
    """Repository for Booking entity operations."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        super().__init__(db, Booking)

    def find_for_tutor(self, tutor_name: str) -> List[Booking]:
        """Bookings addressed to a tutor, matching the name case-insensitively."""
        query = (
            self._build_query()
            .filter(func.lower(Booking.tutor_name) == tutor_name.lower())
            .order_by(Booking.id)
        )
        return self._execute_query(query)

    def find_for_student(self, student_email: str) -> List[Booking]:
        return self.find_by(student_email=student_email)

    def set_status(self, booking: Booking, status: BookingStatus) -> Booking:
        """Apply a status transition and stamp ``updated_at``."""
        booking.status = status.value
        booking.updated_at = datetime.now(timezone.utc)
        self.flush()
        return booking
