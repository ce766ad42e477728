# backend/tutorconnect/models/message.py
"""
Message and file attachment models for the chat system.

Messages are append-only. A message keeps its conversation id even when
the conversation row is missing, so there is no foreign key on it.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text

from ..core.enums import MessageType
from ..core.ulid_helper import generate_ulid
from ..database import Base


class Message(Base):
    """
    A text, file or welcome message inside a conversation.

    ``read`` is flipped by the receiver marking the conversation read.
    """

    __tablename__ = "messages"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    conversation_id = Column(String(255), nullable=False)
    sender_name = Column(String(255), nullable=False)
    sender_role = Column(String(20), nullable=False)
    receiver_name = Column(String(255), nullable=False)
    message = Column(Text, nullable=False, default="")
    type = Column(String(20), nullable=False, default=MessageType.TEXT.value)
    timestamp = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    read = Column(Boolean, nullable=False, default=False)

    file_url = Column(Text, nullable=True)
    file_name = Column(String(255), nullable=True)
    file_type = Column(String(255), nullable=True)
    file_size = Column(Integer, nullable=True)

    __table_args__ = (
        Index("idx_messages_conversation_timestamp", "conversation_id", "timestamp"),
        Index("idx_messages_receiver", "receiver_name"),
    )

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, conversation={self.conversation_id}, type={self.type})>"


class FileAttachment(Base):
    """Uploaded file kept as a data URL until it is referenced by a file message."""

    __tablename__ = "file_attachments"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    conversation_id = Column(String(255), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(255), nullable=False)
    size = Column(Integer, nullable=False)
    data = Column(Text, nullable=False)
    uploaded_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
