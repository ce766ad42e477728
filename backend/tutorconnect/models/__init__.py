# backend/tutorconnect/models/__init__.py
"""
Database models for the TutorConnect workflow engine.

Importing this package registers every table on ``Base.metadata``.
"""

from .booking import Booking
from .conversation import Conversation
from .message import FileAttachment, Message
from .notification import Notification
from .student_rollup import StudentRollup
from .tutor_profile import TutorProfile
from .tutoring_session import StudentSessionRecord, TutoringSession

__all__ = [
    "Booking",
    "Conversation",
    "FileAttachment",
    "Message",
    "Notification",
    "StudentRollup",
    "StudentSessionRecord",
    "TutorProfile",
    "TutoringSession",
]
