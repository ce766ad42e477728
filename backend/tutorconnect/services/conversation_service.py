# backend/tutorconnect/services/conversation_service.py
"""
Conversation Service for booking-scoped messaging.

Handles business logic for the conversation system including:
- Opening exactly one conversation per confirmed booking
- Listing conversations for a participant
- Read and typing state per role
"""

import logging
import re
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.enums import ConversationStatus, UserRole
from ..models.booking import Booking
from ..models.conversation import Conversation
from ..repositories.conversation_repository import ConversationRepository
from ..repositories.factory import RepositoryFactory
from ..repositories.message_repository import MessageRepository
from .base import BaseService

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def build_conversation_id(tutor_name: str, student_name: str, booking_id: str) -> str:
    """Deterministic conversation id; whitespace runs become "_"."""
    return _WHITESPACE.sub("_", f"{tutor_name}_{student_name}_{booking_id}")


class ConversationService(BaseService):
    """
    Service for managing booking conversations.

    Owns the unread-counter and typing-state invariants; the message
    service updates previews and counters through the same repository.
    """

    def __init__(
        self,
        db: Session,
        conversation_repository: Optional[ConversationRepository] = None,
        message_repository: Optional[MessageRepository] = None,
    ):
        """
        Initialize conversation service.

        Args:
            db: Database session
            conversation_repository: Optional repository for conversations
            message_repository: Optional repository for messages
        """
        super().__init__(db)
        self.conversation_repository = (
            conversation_repository or RepositoryFactory.create_conversation_repository(db)
        )
        self.message_repository = message_repository or RepositoryFactory.create_message_repository(
            db
        )

    @BaseService.measure_operation("create_conversation")
    def create_conversation(self, booking: Booking) -> Conversation:
        """
        Open the conversation for a confirmed booking.

        Idempotent: a second call for the same booking returns the
        existing record unchanged. A new conversation starts with one
        unread message for the student, the tutor's welcome.
        """
        conversation_id = build_conversation_id(
            booking.tutor_name, booking.student_name, booking.id
        )
        with self.transaction():
            conversation, created = self.conversation_repository.get_or_create(
                conversation_id,
                booking_id=booking.id,
                tutor_name=booking.tutor_name,
                student_name=booking.student_name,
                student_email=booking.student_email,
                subject=booking.subject,
                session_date=booking.requested_date,
                session_time=booking.requested_time,
                duration_minutes=booking.duration_minutes,
                status=ConversationStatus.ACTIVE.value,
                last_message="",
                unread_count_tutor=0,
                unread_count_student=1,
                typing_tutor=False,
                typing_student=False,
            )

        if created:
            self.logger.info(
                f"Conversation {conversation_id} opened",
                extra={"conversation_id": conversation_id, "booking_id": booking.id},
            )
        else:
            self.logger.debug(f"Conversation {conversation_id} already exists")
        return conversation

    @BaseService.measure_operation("get_conversation")
    def get_conversation(self, conversation_id: str) -> Optional[Conversation]:
        return self.conversation_repository.get_by_id(conversation_id)

    @BaseService.measure_operation("get_user_conversations")
    def get_user_conversations(self, user_name: str, role: UserRole) -> List[Conversation]:
        """
        Conversations where ``user_name`` is the ``role`` participant.

        Returns:
            Most recently active first
        """
        return self.conversation_repository.find_for_user(user_name, UserRole(role))

    @BaseService.measure_operation("mark_messages_as_read")
    def mark_messages_as_read(self, conversation_id: str, user_name: str, role: UserRole) -> None:
        """
        Acknowledge a conversation for ``role``.

        Zeroes the role's unread counter and flags every message of the
        conversation addressed to ``user_name`` as read.
        """
        role = UserRole(role)
        with self.transaction():
            marked = self.message_repository.mark_received_as_read(conversation_id, user_name)
            conversation = self.conversation_repository.get_by_id(conversation_id)
            if conversation:
                self.conversation_repository.reset_unread(conversation, role)

        self.logger.debug(
            f"{user_name} read conversation {conversation_id}",
            extra={"conversation_id": conversation_id, "messages_marked": marked},
        )

    @BaseService.measure_operation("set_typing_status")
    def set_typing_status(
        self, conversation_id: str, user_name: str, role: UserRole, is_typing: bool
    ) -> None:
        """Set the typing flag of ``role``; no-op when the conversation is missing."""
        conversation = self.conversation_repository.get_by_id(conversation_id)
        if not conversation:
            self.logger.debug(f"Typing update for unknown conversation {conversation_id}")
            return

        with self.transaction():
            self.conversation_repository.set_typing(conversation, UserRole(role), bool(is_typing))
        self.logger.debug(f"{user_name} typing={bool(is_typing)} in {conversation_id}")
