# backend/tutorconnect/repositories/conversation_repository.py
"""
Conversation Repository for booking-scoped messaging.

Provides data access methods for conversations between tutors and students.
Follows the repository pattern with clean separation from business logic.
"""

from datetime import datetime
from typing import Any, List, Tuple

from sqlalchemy.orm import Session

from ..core.enums import UserRole
from ..models.conversation import Conversation
from .base_repository import BaseRepository


class ConversationRepository(BaseRepository[Conversation]):
    """
    Repository for Conversation entity operations.

    Handles all database operations for conversations including:
    - Idempotent creation keyed by the derived conversation id
    - Listing conversations for a participant
    - Updating thread metadata (preview, unread counters, typing flags)
    """

    def __init__(self, db: Session):
        """Initialize with database session."""
        super().__init__(db, Conversation)

    def get_or_create(self, conversation_id: str, **fields: Any) -> Tuple[Conversation, bool]:
        """
        Get an existing conversation or create a new one.

        Safe to call multiple times with the same id.

        Returns:
            Tuple of (conversation, created) where created is True if new
        """
        existing = self.get_by_id(conversation_id)
        if existing:
            return existing, False

        conversation = self.create(id=conversation_id, **fields)
        return conversation, True

    def find_for_user(self, user_name: str, role: UserRole) -> List[Conversation]:
        """
        Conversations where ``user_name`` is the ``role`` participant.

        Returns:
            List of conversations ordered by last_message_time desc
        """
        column = Conversation.tutor_name if role == UserRole.TUTOR else Conversation.student_name
        query = (
            self._build_query()
            .filter(column == user_name)
            .order_by(Conversation.last_message_time.desc(), Conversation.id.desc())
        )
        return self._execute_query(query)

    def update_preview(
        self, conversation: Conversation, preview: str, message_time: datetime
    ) -> None:
        conversation.last_message = preview
        conversation.last_message_time = message_time
        self.flush()

    def increment_unread(self, conversation: Conversation, role: UserRole) -> None:
        """Bump the unread counter of the role that will read the message."""
        if role == UserRole.TUTOR:
            conversation.unread_count_tutor = (conversation.unread_count_tutor or 0) + 1
        else:
            conversation.unread_count_student = (conversation.unread_count_student or 0) + 1
        self.flush()

    def reset_unread(self, conversation: Conversation, role: UserRole) -> None:
        if role == UserRole.TUTOR:
            conversation.unread_count_tutor = 0
        else:
            conversation.unread_count_student = 0
        self.flush()

    def set_typing(self, conversation: Conversation, role: UserRole, is_typing: bool) -> None:
        if role == UserRole.TUTOR:
            conversation.typing_tutor = is_typing
        else:
            conversation.typing_student = is_typing
        self.flush()
