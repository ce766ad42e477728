# backend/tutorconnect/services/message_service.py
"""
Message Service for the chat system.

Handles business logic for conversation messages including:
- Appending text, file and welcome messages
- Keeping the conversation preview and unread counters current
- Reading uploaded files into data URLs
"""

import base64
from datetime import datetime, timezone
import logging
from typing import Any, List, Mapping, Optional, Protocol, Union

from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.enums import MessageType, UserRole
from ..core.exceptions import FileReadException, ValidationException
from ..models.booking import Booking
from ..models.message import Message
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.conversation_repository import ConversationRepository
from ..repositories.factory import RepositoryFactory
from ..repositories.message_repository import FileAttachmentRepository, MessageRepository
from ..schemas.message import FileRecord, MessageCreate
from .base import BaseService
from .notification_templates import render_welcome_message

logger = logging.getLogger(__name__)

FILE_PREVIEW_PREFIX = "📎 "
DEFAULT_FILE_TYPE = "application/octet-stream"


class UploadedFile(Protocol):
    """What ``upload_file`` needs from an upload (FastAPI's UploadFile fits)."""

    filename: Optional[str]
    content_type: Optional[str]

    async def read(self, size: int = -1) -> bytes: ...


def build_message_preview(text: str, file_name: Optional[str], limit: Optional[int] = None) -> str:
    """
    Conversation list preview for a message.

    File messages show the paperclip and file name; text is cut to
    ``limit`` characters with an ellipsis when longer.
    """
    if file_name:
        return f"{FILE_PREVIEW_PREFIX}{file_name}"
    limit = limit or settings.message_preview_length
    if len(text) > limit:
        return text[:limit] + "..."
    return text


class MessageService(BaseService):
    """
    Message store.

    The conversation row is updated in the same transaction as the
    message insert; a message for an unknown conversation is still
    stored.
    """

    def __init__(
        self,
        db: Session,
        message_repository: Optional[MessageRepository] = None,
        conversation_repository: Optional[ConversationRepository] = None,
        file_repository: Optional[FileAttachmentRepository] = None,
    ):
        super().__init__(db)
        self.message_repository = message_repository or RepositoryFactory.create_message_repository(
            db
        )
        self.conversation_repository = (
            conversation_repository or RepositoryFactory.create_conversation_repository(db)
        )
        self.file_repository = (
            file_repository or RepositoryFactory.create_file_attachment_repository(db)
        )

    @BaseService.measure_operation("send_message")
    def send_message(self, data: Union[MessageCreate, Mapping[str, Any]]) -> Message:
        """
        Append a message to its conversation.

        Args:
            data: MessageCreate or an equivalent mapping

        Returns:
            The stored message

        Raises:
            ValidationException: If required fields are missing
        """
        payload = self._coerce_payload(data)
        now = datetime.now(timezone.utc)

        with self.transaction():
            message = self.message_repository.create(
                conversation_id=payload.conversation_id,
                sender_name=payload.sender_name,
                sender_role=payload.sender_role.value,
                receiver_name=payload.receiver_name,
                message=payload.message,
                type=payload.type.value,
                timestamp=now,
                read=False,
                file_url=payload.file_url,
                file_name=payload.file_name,
                file_type=payload.file_type,
                file_size=payload.file_size,
            )

            conversation = self.conversation_repository.get_by_id(payload.conversation_id)
            if conversation:
                self.conversation_repository.update_preview(
                    conversation,
                    build_message_preview(payload.message, payload.file_name),
                    now,
                )
                # Conversations are opened with the welcome already counted
                if payload.type != MessageType.WELCOME:
                    receiver_role = (
                        UserRole.STUDENT if payload.sender_role == UserRole.TUTOR else UserRole.TUTOR
                    )
                    self.conversation_repository.increment_unread(conversation, receiver_role)
            else:
                self.logger.warning(
                    f"Message {message.id} stored for unknown conversation {payload.conversation_id}"
                )

        prometheus_metrics.record_message_sent(payload.type.value)
        self.logger.info(
            f"Message sent in conversation {payload.conversation_id}",
            extra={
                "conversation_id": payload.conversation_id,
                "message_id": message.id,
                "message_type": payload.type.value,
            },
        )
        return message

    def send_welcome_message(self, booking: Booking, conversation_id: str) -> Message:
        """Send the tutor's welcome message for a newly confirmed booking."""
        return self.send_message(
            MessageCreate(
                conversation_id=conversation_id,
                sender_name=booking.tutor_name,
                sender_role=UserRole.TUTOR,
                receiver_name=booking.student_name,
                message=render_welcome_message(booking),
                type=MessageType.WELCOME,
            )
        )

    @BaseService.measure_operation("get_conversation_messages")
    def get_conversation_messages(self, conversation_id: str) -> List[Message]:
        """Messages of a conversation, oldest first."""
        return self.message_repository.find_by_conversation(conversation_id)

    @BaseService.measure_operation("upload_file")
    async def upload_file(self, file: UploadedFile, conversation_id: str) -> FileRecord:
        """
        Read an uploaded file into a data URL and store it.

        The caller then sends a file message with ``FileRecord.to_message_fields()``.

        Raises:
            FileReadException: If the file bytes cannot be read
        """
        file_name = getattr(file, "filename", None)
        try:
            raw = await file.read()
        except Exception as exc:
            self.logger.error(f"Reading upload {file_name} failed: {exc}")
            raise FileReadException(file_name, str(exc)) from exc

        content_type = getattr(file, "content_type", None) or DEFAULT_FILE_TYPE
        size = getattr(file, "size", None)
        if size is None:
            size = len(raw)
        data_url = f"data:{content_type};base64,{base64.b64encode(raw).decode('ascii')}"

        with self.transaction():
            attachment = self.file_repository.create(
                conversation_id=conversation_id,
                name=file_name or "upload",
                type=content_type,
                size=size,
                data=data_url,
            )

        self.logger.info(
            f"File {attachment.name} uploaded to conversation {conversation_id}",
            extra={"file_id": attachment.id, "file_size": size},
        )
        return FileRecord(
            id=attachment.id,
            name=attachment.name,
            type=attachment.type,
            size=attachment.size,
            data=attachment.data,
            conversation_id=attachment.conversation_id,
            uploaded_at=attachment.uploaded_at,
        )

    @staticmethod
    def _coerce_payload(data: Union[MessageCreate, Mapping[str, Any]]) -> MessageCreate:
        if isinstance(data, MessageCreate):
            return data
        try:
            return MessageCreate.model_validate(dict(data))
        except ValidationError as exc:
            raise ValidationException(
                "Invalid message payload",
                code="INVALID_MESSAGE",
                details={"errors": exc.errors(include_url=False, include_context=False)},
            ) from exc
