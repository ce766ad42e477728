# backend/tutorconnect/services/session_service.py
"""
Session Service: schedules a tutoring session for a confirmed booking.

Each session gets a video meeting link built from a short random room
token.
"""

import secrets
import string
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.enums import SessionStatus, UserRole
from ..models.booking import Booking
from ..models.tutoring_session import TutoringSession
from ..repositories.factory import RepositoryFactory
from ..repositories.session_repository import TutoringSessionRepository
from .base import BaseService

_ROOM_ALPHABET = string.ascii_lowercase + string.digits


def generate_meeting_link(token_length: Optional[int] = None) -> str:
    """Meeting URL with a fresh lowercase alphanumeric room token."""
    length = token_length or settings.meeting_token_length
    token = "".join(secrets.choice(_ROOM_ALPHABET) for _ in range(length))
    return f"{settings.meeting_base_url}/{settings.meeting_room_prefix}-{token}"


class SessionService(BaseService):
    """Session ledger for tutor-facing scheduled sessions."""

    def __init__(
        self,
        db: Session,
        session_repository: Optional[TutoringSessionRepository] = None,
    ):
        super().__init__(db)
        self.session_repository = (
            session_repository or RepositoryFactory.create_tutoring_session_repository(db)
        )

    @BaseService.measure_operation("create_session")
    def create_session(self, booking: Booking) -> TutoringSession:
        """
        Schedule a session for ``booking``.

        Every call creates a new record; the booking service guarantees it
        is called once per confirmation.
        """
        with self.transaction():
            session = self.session_repository.create(
                booking_id=booking.id,
                tutor_name=booking.tutor_name,
                student_name=booking.student_name,
                student_email=booking.student_email,
                subject=booking.subject,
                scheduled_date=booking.requested_date,
                scheduled_time=booking.requested_time,
                duration_minutes=booking.duration_minutes,
                status=SessionStatus.SCHEDULED.value,
                meeting_link=generate_meeting_link(),
                total_cost=booking.total_cost,
                materials=[],
                notes="",
                rating=None,
            )
        self.logger.info(
            f"Session scheduled for booking {booking.id}",
            extra={"session_id": session.id, "booking_id": booking.id},
        )
        return session

    @BaseService.measure_operation("get_user_sessions")
    def get_user_sessions(self, user_name: str, role: UserRole) -> List[TutoringSession]:
        return self.session_repository.find_for_user(user_name, UserRole(role))
