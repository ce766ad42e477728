# backend/tutorconnect/models/student_rollup.py
"""
"My students" rollup for tutors.

One row per (tutor_name, student_email) pair, incrementally maintained
as bookings for the pair are confirmed.
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, String, UniqueConstraint

from ..core.enums import RollupStatus
from ..core.ulid_helper import generate_ulid
from ..database import Base


class StudentRollup(Base):
    """Aggregate of one student's confirmed bookings with one tutor."""

    __tablename__ = "student_rollups"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    tutor_name = Column(String(255), nullable=False, index=True)
    student_name = Column(String(255), nullable=False)
    student_email = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    sessions_count = Column(Integer, nullable=False, default=1)
    total_earnings = Column(Numeric(12, 2), nullable=False, default=0)
    first_session = Column(String(32), nullable=False)
    last_session = Column(String(32), nullable=False)
    status = Column(String(20), nullable=False, default=RollupStatus.ACTIVE.value)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        UniqueConstraint("tutor_name", "student_email", name="uq_student_rollups_tutor_student"),
        CheckConstraint("sessions_count >= 1", name="ck_student_rollups_sessions_count"),
    )

    def __repr__(self) -> str:
        return (
            f"<StudentRollup(tutor={self.tutor_name}, student={self.student_email}, "
            f"sessions={self.sessions_count})>"
        )
