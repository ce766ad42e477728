# backend/tutorconnect/core/enums.py
"""
Core enums for the TutorConnect workflow engine.

Values are the lowercase strings persisted in the store and exchanged
with the UI collaborators.
"""

from enum import Enum


class UserRole(str, Enum):
    """Which side of a booking a user is acting on."""

    TUTOR = "tutor"
    STUDENT = "student"


class BookingStatus(str, Enum):
    """Booking lifecycle statuses."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    DECLINED = "declined"

    @property
    def is_terminal(self) -> bool:
        return self is not BookingStatus.PENDING


class MessageType(str, Enum):
    TEXT = "text"
    FILE = "file"
    WELCOME = "welcome"


class NotificationType(str, Enum):
    """Booking lifecycle events addressed to users."""

    BOOKING_REQUEST = "booking_request"
    BOOKING_CONFIRMED = "booking_confirmed"
    BOOKING_DECLINED = "booking_declined"


class ConversationStatus(str, Enum):
    ACTIVE = "active"


class SessionStatus(str, Enum):
    SCHEDULED = "scheduled"


class RollupStatus(str, Enum):
    ACTIVE = "active"


STUDENT_SESSION_CONFIRMED = "confirmed"
