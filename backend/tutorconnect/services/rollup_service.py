# backend/tutorconnect/services/rollup_service.py
"""
Rollup Service maintaining the denormalized per-user views.

- "My students" (tutor-facing): one row per (tutor_name, student_email),
  incremented on every confirmation for the pair.
- "My sessions" (student-facing): one row per confirmed booking, never
  deduplicated.
"""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.enums import STUDENT_SESSION_CONFIRMED, RollupStatus
from ..models.booking import Booking
from ..models.student_rollup import StudentRollup
from ..models.tutoring_session import StudentSessionRecord
from ..repositories.factory import RepositoryFactory
from ..repositories.rollup_repository import StudentRollupRepository
from ..repositories.session_repository import StudentSessionRecordRepository
from .base import BaseService


class RollupService(BaseService):
    def __init__(
        self,
        db: Session,
        rollup_repository: Optional[StudentRollupRepository] = None,
        student_session_repository: Optional[StudentSessionRecordRepository] = None,
    ):
        super().__init__(db)
        self.rollup_repository = (
            rollup_repository or RepositoryFactory.create_student_rollup_repository(db)
        )
        self.student_session_repository = (
            student_session_repository
            or RepositoryFactory.create_student_session_record_repository(db)
        )

    @BaseService.measure_operation("add_to_my_students")
    def add_to_my_students(self, booking: Booking) -> StudentRollup:
        """Create or increment the tutor's rollup row for this student."""
        with self.transaction():
            rollup = self.rollup_repository.find_by_pair(booking.tutor_name, booking.student_email)
            if rollup:
                rollup.sessions_count += 1
                rollup.total_earnings = Decimal(rollup.total_earnings) + Decimal(booking.total_cost)
                rollup.last_session = booking.requested_date
                self.rollup_repository.flush()
                created = False
            else:
                rollup = self.rollup_repository.create(
                    tutor_name=booking.tutor_name,
                    student_name=booking.student_name,
                    student_email=booking.student_email,
                    subject=booking.subject,
                    sessions_count=1,
                    total_earnings=Decimal(booking.total_cost),
                    first_session=booking.requested_date,
                    last_session=booking.requested_date,
                    status=RollupStatus.ACTIVE.value,
                )
                created = True

        self.log_operation(
            "add_to_my_students",
            tutor_name=booking.tutor_name,
            student_email=booking.student_email,
            sessions_count=rollup.sessions_count,
            new_rollup=created,
        )
        return rollup

    @BaseService.measure_operation("add_to_my_sessions")
    def add_to_my_sessions(self, booking: Booking) -> StudentSessionRecord:
        """Append the student's "my sessions" row for this booking."""
        with self.transaction():
            record = self.student_session_repository.create(
                booking_id=booking.id,
                student_name=booking.student_name,
                student_email=booking.student_email,
                tutor_name=booking.tutor_name,
                subject=booking.subject,
                session_date=booking.requested_date,
                session_time=booking.requested_time,
                duration_minutes=booking.duration_minutes,
                cost=booking.total_cost,
                status=STUDENT_SESSION_CONFIRMED,
            )
        return record

    @BaseService.measure_operation("get_my_students")
    def get_my_students(self, tutor_name: str) -> List[StudentRollup]:
        return self.rollup_repository.find_for_tutor(tutor_name)

    @BaseService.measure_operation("get_my_sessions")
    def get_my_sessions(self, student_email: str) -> List[StudentSessionRecord]:
        return self.student_session_repository.find_for_student(student_email)
