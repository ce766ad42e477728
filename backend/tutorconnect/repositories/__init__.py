# backend/tutorconnect/repositories/__init__.py
"""
Repository layer for the TutorConnect workflow engine.

Repositories encapsulate all data access; services never build queries
themselves.
"""

from .base_repository import BaseRepository
from .booking_repository import BookingRepository
from .conversation_repository import ConversationRepository
from .factory import RepositoryFactory
from .message_repository import FileAttachmentRepository, MessageRepository
from .notification_repository import NotificationRepository
from .rollup_repository import StudentRollupRepository
from .session_repository import StudentSessionRecordRepository, TutoringSessionRepository
from .tutor_profile_repository import TutorProfileRepository

__all__ = [
    "BaseRepository",
    "BookingRepository",
    "ConversationRepository",
    "FileAttachmentRepository",
    "MessageRepository",
    "NotificationRepository",
    "RepositoryFactory",
    "StudentRollupRepository",
    "StudentSessionRecordRepository",
    "TutorProfileRepository",
    "TutoringSessionRepository",
]
