# backend/tutorconnect/schemas/message.py
"""
Request and response schemas for the message/chat system.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from ..core.enums import MessageType, UserRole
from ._strict_base import RecordModel, StrictModel, StrictRequestModel


class MessageCreate(StrictRequestModel):
    """A message to append to a conversation."""

    conversation_id: str
    sender_name: str
    sender_role: UserRole
    receiver_name: str
    message: str = ""
    type: MessageType = MessageType.TEXT
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_content(self) -> "MessageCreate":
        """File messages need a file name; every other message needs text."""
        if self.type == MessageType.FILE:
            if not self.file_name:
                raise ValueError("file messages require file_name")
        elif not self.message:
            raise ValueError("message text is required")
        return self


class MessageResponse(RecordModel):
    id: str
    conversation_id: str
    sender_name: str
    sender_role: str
    receiver_name: str
    message: str
    type: str
    timestamp: datetime
    read: bool
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = None


class FileAttachmentResponse(RecordModel):
    id: str
    conversation_id: str
    name: str
    type: str
    size: int
    data: str
    uploaded_at: datetime


class FileRecord(StrictModel):
    """Result of an upload, ready to be attached to a file message."""

    id: str
    name: str
    type: str
    size: int
    data: str
    conversation_id: str
    uploaded_at: datetime

    def to_message_fields(self) -> dict[str, object]:
        """Fields a ``MessageCreate`` of type file takes from this record."""
        return {
            "file_url": self.data,
            "file_name": self.name,
            "file_type": self.type,
            "file_size": self.size,
        }
