# backend/tutorconnect/models/conversation.py
"""
Conversation model for booking-scoped messaging.

One conversation is opened per confirmed booking. Its id is derived
from the tutor name, student name and booking id, which makes creation
idempotent. The conversation carries the denormalized thread state the
chat list needs: last message preview, per-role unread counters and
per-role typing flags.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)

from ..core.enums import ConversationStatus, UserRole
from ..database import Base


class Conversation(Base):
    """
    Message thread between the tutor and student of a confirmed booking.

    Attributes:
        id: Deterministic id (tutor_student_bookingid, whitespace as "_")
        booking_id: The confirmed booking this thread was opened for
        unread_count_tutor / unread_count_student: Messages not yet read by that role
        typing_tutor / typing_student: Live typing indicators
    """

    __tablename__ = "conversations"

    id = Column(String(255), primary_key=True)
    booking_id = Column(String(26), ForeignKey("bookings.id"), nullable=False)
    tutor_name = Column(String(255), nullable=False)
    student_name = Column(String(255), nullable=False)
    student_email = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    session_date = Column(String(32), nullable=False)
    session_time = Column(String(32), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default=ConversationStatus.ACTIVE.value)

    last_message = Column(Text, nullable=False, default="")
    last_message_time = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    unread_count_tutor = Column(Integer, nullable=False, default=0)
    unread_count_student = Column(Integer, nullable=False, default=0)
    typing_tutor = Column(Boolean, nullable=False, default=False)
    typing_student = Column(Boolean, nullable=False, default=False)

    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        CheckConstraint("unread_count_tutor >= 0", name="ck_conversations_unread_tutor"),
        CheckConstraint("unread_count_student >= 0", name="ck_conversations_unread_student"),
        Index("idx_conversations_tutor", "tutor_name"),
        Index("idx_conversations_student", "student_name"),
        Index("idx_conversations_last_message", "last_message_time"),
    )

    def __repr__(self) -> str:
        return f"<Conversation(id={self.id}, tutor={self.tutor_name}, student={self.student_name})>"

    def participant_name(self, role: UserRole) -> str:
        """Name of the participant acting as ``role``."""
        return str(self.tutor_name if role == UserRole.TUTOR else self.student_name)

    def get_other_participant_name(self, role: UserRole) -> str:
        """Name of the participant on the other side of ``role``."""
        return str(self.student_name if role == UserRole.TUTOR else self.tutor_name)

    def unread_count_for(self, role: UserRole) -> int:
        return int(self.unread_count_tutor if role == UserRole.TUTOR else self.unread_count_student)
