# backend/tutorconnect/services/identity_service.py
"""
Identity resolution for the booking workflow.

Users are identified by display name. A user acts as a tutor when a
live tutor profile is stored under their name; everyone else acts as
a student unless the caller already knows the role.
"""

from typing import List, Optional, Union

from sqlalchemy.orm import Session

from ..core.enums import UserRole
from ..core.exceptions import ValidationException
from ..models.tutor_profile import TutorProfile
from ..repositories.factory import RepositoryFactory
from ..repositories.tutor_profile_repository import TutorProfileRepository
from .base import BaseService


class IdentityService(BaseService):
    def __init__(
        self,
        db: Session,
        tutor_profile_repository: Optional[TutorProfileRepository] = None,
    ):
        super().__init__(db)
        self.tutor_profile_repository = (
            tutor_profile_repository or RepositoryFactory.create_tutor_profile_repository(db)
        )

    @BaseService.measure_operation("go_live")
    def go_live(self, user_name: str) -> TutorProfile:
        """Make the tutor profile of ``user_name`` visible to students."""
        with self.transaction():
            profile = self.tutor_profile_repository.set_live(user_name, True)
        self.log_operation("go_live", user_name=user_name)
        return profile

    @BaseService.measure_operation("go_offline")
    def go_offline(self, user_name: str) -> TutorProfile:
        with self.transaction():
            profile = self.tutor_profile_repository.set_live(user_name, False)
        self.log_operation("go_offline", user_name=user_name)
        return profile

    def is_live(self, user_name: str) -> bool:
        profile = self.tutor_profile_repository.get_by_user_name(user_name)
        return bool(profile and profile.is_live)

    def resolve_role(
        self, user_name: str, explicit_role: Optional[Union[UserRole, str]] = None
    ) -> UserRole:
        """
        Decide whether ``user_name`` acts as tutor or student.

        An explicit role always wins. Otherwise the stored live profile
        flag decides.
        """
        if explicit_role is not None:
            try:
                return UserRole(explicit_role)
            except ValueError:
                raise ValidationException(
                    f"Unknown role: {explicit_role}",
                    code="INVALID_ROLE",
                    details={"role": str(explicit_role)},
                )
        return UserRole.TUTOR if self.is_live(user_name) else UserRole.STUDENT

    def list_live_tutors(self, exclude_name: Optional[str] = None) -> List[str]:
        """Names of live tutors, leaving out the current user."""
        return [
            profile.user_name
            for profile in self.tutor_profile_repository.find_live()
            if profile.user_name != exclude_name
        ]
