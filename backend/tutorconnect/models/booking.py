# backend/tutorconnect/models/booking.py
"""
Booking model for the TutorConnect workflow engine.

A booking is a student's request for a tutor's time. It is created
pending and moves exactly once to confirmed or declined; it is never
deleted. Service details (subject, rate, cost) are snapshotted at
request time.
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Index, Integer, Numeric, String, Text

from ..core.enums import BookingStatus
from ..core.ulid_helper import generate_ulid
from ..database import Base


class Booking(Base):
    """
    Booking request between a student and a tutor.

    Only ``status`` and ``updated_at`` change after creation.
    """

    __tablename__ = "bookings"

    id = Column(String(26), primary_key=True, default=generate_ulid)

    # Parties (display names are the join key used by the UI)
    tutor_id = Column(String(64), nullable=True)
    tutor_name = Column(String(255), nullable=False)
    student_name = Column(String(255), nullable=False)
    student_email = Column(String(255), nullable=False)

    # Requested slot, stored as given by the booking form
    subject = Column(String(255), nullable=False)
    requested_date = Column(String(32), nullable=False)
    requested_time = Column(String(32), nullable=False)
    duration_minutes = Column(Integer, nullable=False)

    hourly_rate = Column(Numeric(10, 2), nullable=False)
    total_cost = Column(Numeric(10, 2), nullable=False)
    message = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value, index=True)

    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'declined')",
            name="ck_bookings_status",
        ),
        Index("idx_bookings_student_email", "student_email"),
        Index("idx_bookings_tutor_name", "tutor_name"),
    )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, tutor={self.tutor_name}, student={self.student_name}, status={self.status})>"

    @property
    def is_pending(self) -> bool:
        return self.status == BookingStatus.PENDING.value
