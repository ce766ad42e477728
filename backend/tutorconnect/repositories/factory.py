# backend/tutorconnect/repositories/factory.py
"""
One place to build repositories for a session.

Repository modules are imported lazily so that models and services can
import the factory without cycles.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from .base_repository import BaseRepository

if TYPE_CHECKING:
    from .booking_repository import BookingRepository
    from .conversation_repository import ConversationRepository
    from .message_repository import FileAttachmentRepository, MessageRepository
    from .notification_repository import NotificationRepository
    from .rollup_repository import StudentRollupRepository
    from .session_repository import StudentSessionRecordRepository, TutoringSessionRepository
    from .tutor_profile_repository import TutorProfileRepository


class RepositoryFactory:
    """Static constructors, one per repository."""

    @staticmethod
    def create_base_repository(db: Session, model) -> BaseRepository:
        return BaseRepository(db, model)

    @staticmethod
    def create_booking_repository(db: Session) -> "BookingRepository":
        from .booking_repository import BookingRepository

        return BookingRepository(db)

    @staticmethod
    def create_conversation_repository(db: Session) -> "ConversationRepository":
        """Create repository for conversation threads."""
        from .conversation_repository import ConversationRepository

        return ConversationRepository(db)

    @staticmethod
    def create_message_repository(db: Session) -> "MessageRepository":
        from .message_repository import MessageRepository

        return MessageRepository(db)

    @staticmethod
    def create_file_attachment_repository(db: Session) -> "FileAttachmentRepository":
        from .message_repository import FileAttachmentRepository

        return FileAttachmentRepository(db)

    @staticmethod
    def create_tutoring_session_repository(db: Session) -> "TutoringSessionRepository":
        """Create repository for tutor-facing scheduled sessions."""
        from .session_repository import TutoringSessionRepository

        return TutoringSessionRepository(db)

    @staticmethod
    def create_student_session_record_repository(
        db: Session,
    ) -> "StudentSessionRecordRepository":
        """Create repository for the student "my sessions" rows."""
        from .session_repository import StudentSessionRecordRepository

        return StudentSessionRecordRepository(db)

    @staticmethod
    def create_student_rollup_repository(db: Session) -> "StudentRollupRepository":
        """Create repository for the tutor "my students" rollup."""
        from .rollup_repository import StudentRollupRepository

        return StudentRollupRepository(db)

    @staticmethod
    def create_notification_repository(db: Session) -> "NotificationRepository":
        from .notification_repository import NotificationRepository

        return NotificationRepository(db)

    @staticmethod
    def create_tutor_profile_repository(db: Session) -> "TutorProfileRepository":
        from .tutor_profile_repository import TutorProfileRepository

        return TutorProfileRepository(db)
