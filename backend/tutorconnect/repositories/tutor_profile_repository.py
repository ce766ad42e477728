# backend/tutorconnect/repositories/tutor_profile_repository.py
"""Tutor Profile Repository backing role resolution."""

from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.tutor_profile import TutorProfile
from .base_repository import BaseRepository


class TutorProfileRepository(BaseRepository[TutorProfile]):
    def __init__(self, db: Session):
        super().__init__(db, TutorProfile)

    def get_by_user_name(self, user_name: str) -> Optional[TutorProfile]:
        return self.find_one_by(user_name=user_name)

    def set_live(self, user_name: str, is_live: bool) -> TutorProfile:
        """Upsert the live flag for ``user_name``."""
        profile = self.get_by_user_name(user_name)
        if profile is None:
            return self.create(user_name=user_name, is_live=is_live)
        profile.is_live = is_live
        self.flush()
        return profile

    def find_live(self) -> List[TutorProfile]:
        return self.find_by(is_live=True)
