# backend/tutorconnect/repositories/session_repository.py
"""Repositories for scheduled sessions and the student "my sessions" rows."""

from typing import List

from sqlalchemy.orm import Session

from ..core.enums import UserRole
from ..models.tutoring_session import StudentSessionRecord, TutoringSession
from .base_repository import BaseRepository


class TutoringSessionRepository(BaseRepository[TutoringSession]):
    def __init__(self, db: Session):
        super().__init__(db, TutoringSession)

    def find_for_user(self, user_name: str, role: UserRole) -> List[TutoringSession]:
        if role == UserRole.TUTOR:
            return self.find_by(tutor_name=user_name)
        return self.find_by(student_name=user_name)

    def find_for_booking(self, booking_id: str) -> List[TutoringSession]:
        return self.find_by(booking_id=booking_id)


class StudentSessionRecordRepository(BaseRepository[StudentSessionRecord]):
    def __init__(self, db: Session):
        super().__init__(db, StudentSessionRecord)

    def find_for_student(self, student_email: str) -> List[StudentSessionRecord]:
        return self.find_by(student_email=student_email)
