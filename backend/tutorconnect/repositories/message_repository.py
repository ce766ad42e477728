# backend/tutorconnect/repositories/message_repository.py
"""
Message Repository for the chat system.

Implements the message log and the uploaded-file store.
"""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.message import FileAttachment, Message
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class MessageRepository(BaseRepository[Message]):
    """
    Repository for message data access.

    Messages are append-only; the only update is the ``read`` flag.
    """

    def __init__(self, db: Session):
        """Initialize with Message model."""
        super().__init__(db, Message)
        self.logger = logging.getLogger(__name__)

    def find_by_conversation(self, conversation_id: str) -> List[Message]:
        """
        Messages of a conversation in chronological order.

        Equal timestamps fall back to id order, which is insertion order.
        """
        query = (
            self._build_query()
            .filter(Message.conversation_id == conversation_id)
            .order_by(Message.timestamp.asc(), Message.id.asc())
        )
        return self._execute_query(query)

    def mark_received_as_read(self, conversation_id: str, receiver_name: str) -> int:
        """
        Mark every message of the conversation addressed to ``receiver_name`` as read.

        Returns:
            Number of messages that changed state
        """
        try:
            count = (
                self.db.query(Message)
                .filter(
                    Message.conversation_id == conversation_id,
                    Message.receiver_name == receiver_name,
                    Message.read.is_(False),
                )
                .update({Message.read: True}, synchronize_session="fetch")
            )
            self.logger.info(f"Marked {count} messages as read for {receiver_name}")
            return int(count or 0)
        except SQLAlchemyError as e:
            self.logger.error(f"Error marking messages as read: {str(e)}")
            raise RepositoryException(f"Failed to mark messages as read: {str(e)}")


class FileAttachmentRepository(BaseRepository[FileAttachment]):
    """Repository for uploaded files."""

    def __init__(self, db: Session):
        super().__init__(db, FileAttachment)

    def find_by_conversation(self, conversation_id: str) -> List[FileAttachment]:
        return self.find_by(conversation_id=conversation_id)
