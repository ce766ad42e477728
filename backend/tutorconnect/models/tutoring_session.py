# backend/tutorconnect/models/tutoring_session.py
"""
Scheduled session models.

``TutoringSession`` is the tutor-facing session created on confirmation,
with its generated meeting link. ``StudentSessionRecord`` is the row the
student's "my sessions" view lists; there is one per confirmed booking.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.types import JSON

from ..core.enums import STUDENT_SESSION_CONFIRMED, SessionStatus
from ..core.ulid_helper import generate_ulid
from ..database import Base


class TutoringSession(Base):
    """A scheduled lesson derived from a confirmed booking."""

    __tablename__ = "tutoring_sessions"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    booking_id = Column(String(26), ForeignKey("bookings.id"), nullable=False, index=True)
    tutor_name = Column(String(255), nullable=False, index=True)
    student_name = Column(String(255), nullable=False, index=True)
    student_email = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    scheduled_date = Column(String(32), nullable=False)
    scheduled_time = Column(String(32), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default=SessionStatus.SCHEDULED.value)
    meeting_link = Column(String(512), nullable=False)
    total_cost = Column(Numeric(10, 2), nullable=False)
    materials = Column(JSON, nullable=False, default=list)
    notes = Column(Text, nullable=False, default="")
    rating = Column(Integer, nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    def __repr__(self) -> str:
        return f"<TutoringSession(id={self.id}, booking={self.booking_id}, status={self.status})>"


class StudentSessionRecord(Base):
    """Student-facing "my sessions" row. Never deduplicated."""

    __tablename__ = "student_session_records"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    booking_id = Column(String(26), ForeignKey("bookings.id"), nullable=False)
    student_name = Column(String(255), nullable=False)
    student_email = Column(String(255), nullable=False, index=True)
    tutor_name = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    session_date = Column(String(32), nullable=False)
    session_time = Column(String(32), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    cost = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), nullable=False, default=STUDENT_SESSION_CONFIRMED)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
