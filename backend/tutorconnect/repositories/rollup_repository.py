# backend/tutorconnect/repositories/rollup_repository.py
"""
Rollup Repository for the tutor-facing "my students" view.

Rows are keyed by (tutor_name, student_email); the unique constraint on
the table backs that key.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.student_rollup import StudentRollup
from .base_repository import BaseRepository


class StudentRollupRepository(BaseRepository[StudentRollup]):
    """Repository for StudentRollup entity operations."""

    def __init__(self, db: Session):
        super().__init__(db, StudentRollup)

    def find_by_pair(self, tutor_name: str, student_email: str) -> Optional[StudentRollup]:
        return self.find_one_by(tutor_name=tutor_name, student_email=student_email)

    def find_for_tutor(self, tutor_name: str) -> List[StudentRollup]:
        return self.find_by(tutor_name=tutor_name)
