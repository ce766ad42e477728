# backend/tutorconnect/workspace.py
"""
Workspace: the object the UI collaborators hold.

A workspace is built once per client session over a single database
session and wires every service to the same repositories. It exposes
the engine's external interface; roles left out by the caller are
resolved from the stored tutor profile.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from .core.enums import BookingStatus, UserRole
from .database import clear_all_tables, create_db_engine, create_session_factory, init_db
from .models.booking import Booking
from .models.conversation import Conversation
from .models.message import FileAttachment, Message
from .models.notification import Notification
from .models.student_rollup import StudentRollup
from .models.tutoring_session import StudentSessionRecord, TutoringSession
from .models.tutor_profile import TutorProfile
from .repositories.factory import RepositoryFactory
from .schemas.booking import BookingRequestCreate, BookingResponse
from .schemas.conversation import ConversationResponse
from .schemas.message import (
    FileAttachmentResponse,
    FileRecord,
    MessageCreate,
    MessageResponse,
)
from .schemas.notification import NotificationResponse
from .schemas.session import (
    StudentRollupResponse,
    StudentSessionRecordResponse,
    TutoringSessionResponse,
)
from .services.base import BaseService
from .services.booking_service import BookingService
from .services.conversation_service import ConversationService
from .services.identity_service import IdentityService
from .services.message_service import MessageService, UploadedFile
from .services.notification_service import NotificationService
from .services.rollup_service import RollupService
from .services.session_service import SessionService

logger = logging.getLogger(__name__)

RoleArg = Optional[Union[UserRole, str]]

# (collection name, model, response schema) in export order
_COLLECTIONS = (
    ("bookings", Booking, BookingResponse),
    ("conversations", Conversation, ConversationResponse),
    ("messages", Message, MessageResponse),
    ("files", FileAttachment, FileAttachmentResponse),
    ("sessions", TutoringSession, TutoringSessionResponse),
    ("notifications", Notification, NotificationResponse),
    ("my_students", StudentRollup, StudentRollupResponse),
    ("my_sessions", StudentSessionRecord, StudentSessionRecordResponse),
)


class Workspace(BaseService):
    """Booking-to-conversation-to-session workflow engine for one client session."""

    def __init__(self, db: Session, engine: Optional[Engine] = None):
        super().__init__(db)
        self.engine = engine

        conversation_repository = RepositoryFactory.create_conversation_repository(db)
        message_repository = RepositoryFactory.create_message_repository(db)

        self.identity = IdentityService(db)
        self.notifications = NotificationService(db)
        self.conversations = ConversationService(
            db,
            conversation_repository=conversation_repository,
            message_repository=message_repository,
        )
        self.sessions = SessionService(db)
        self.messages = MessageService(
            db,
            message_repository=message_repository,
            conversation_repository=conversation_repository,
        )
        self.rollups = RollupService(db)
        self.bookings = BookingService(
            db,
            notification_service=self.notifications,
            conversation_service=self.conversations,
            session_service=self.sessions,
            message_service=self.messages,
            rollup_service=self.rollups,
        )

    @classmethod
    def open(cls, database_url: Optional[str] = None) -> "Workspace":
        """Open (creating if needed) the local store and return a workspace over it."""
        engine = create_db_engine(database_url)
        init_db(engine)
        session = create_session_factory(engine)()
        logger.info(f"Workspace opened on {engine.url.render_as_string(hide_password=True)}")
        return cls(session, engine=engine)

    def close(self) -> None:
        self.db.close()
        if self.engine is not None:
            self.engine.dispose()

    def __enter__(self) -> "Workspace":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # Identity

    def resolve_role(self, user_name: str, role: RoleArg = None) -> UserRole:
        return self.identity.resolve_role(user_name, role)

    def go_live(self, user_name: str) -> TutorProfile:
        return self.identity.go_live(user_name)

    def go_offline(self, user_name: str) -> TutorProfile:
        return self.identity.go_offline(user_name)

    def list_live_tutors(self, exclude_name: Optional[str] = None) -> List[str]:
        return self.identity.list_live_tutors(exclude_name)

    # Bookings

    def create_booking_request(
        self, payload: Union[BookingRequestCreate, Mapping[str, Any]]
    ) -> Booking:
        return self.bookings.create_booking_request(payload)

    def update_booking_status(
        self, booking_id: Union[str, int], status: Union[BookingStatus, str]
    ) -> Optional[Booking]:
        return self.bookings.update_booking_status(booking_id, status)

    def get_tutor_bookings(self, tutor_name: str) -> List[Booking]:
        return self.bookings.get_tutor_bookings(tutor_name)

    def get_student_bookings(self, student_email: str) -> List[Booking]:
        return self.bookings.get_student_bookings(student_email)

    # Conversations and messages

    def send_message(self, payload: Union[MessageCreate, Mapping[str, Any]]) -> Message:
        return self.messages.send_message(payload)

    async def upload_file(self, file: UploadedFile, conversation_id: str) -> FileRecord:
        return await self.messages.upload_file(file, conversation_id)

    def get_user_conversations(self, user_name: str, role: RoleArg = None) -> List[Conversation]:
        return self.conversations.get_user_conversations(
            user_name, self.resolve_role(user_name, role)
        )

    def get_conversation_messages(self, conversation_id: str) -> List[Message]:
        return self.messages.get_conversation_messages(conversation_id)

    def mark_messages_as_read(
        self, conversation_id: str, user_name: str, role: RoleArg = None
    ) -> None:
        self.conversations.mark_messages_as_read(
            conversation_id, user_name, self.resolve_role(user_name, role)
        )

    def set_typing_status(
        self, conversation_id: str, user_name: str, role: RoleArg, is_typing: bool
    ) -> None:
        self.conversations.set_typing_status(
            conversation_id, user_name, self.resolve_role(user_name, role), is_typing
        )

    # Rollups, sessions, notifications

    def get_my_students(self, tutor_name: str) -> List[StudentRollup]:
        return self.rollups.get_my_students(tutor_name)

    def get_my_sessions(self, student_email: str) -> List[StudentSessionRecord]:
        return self.rollups.get_my_sessions(student_email)

    def get_user_sessions(self, user_name: str, role: RoleArg = None) -> List[TutoringSession]:
        return self.sessions.get_user_sessions(user_name, self.resolve_role(user_name, role))

    def get_user_notifications(self, user_name: str) -> List[Notification]:
        return self.notifications.get_user_notifications(user_name)

    # Maintenance

    def export_snapshot(self) -> Dict[str, List[Dict[str, Any]]]:
        """Every collection serialized to JSON-ready dicts."""
        snapshot: Dict[str, List[Dict[str, Any]]] = {}
        for name, model, schema in _COLLECTIONS:
            rows = RepositoryFactory.create_base_repository(self.db, model).get_all()
            snapshot[name] = [schema.model_validate(row).model_dump(mode="json") for row in rows]
        self.logger.debug(
            "Snapshot exported", extra={name: len(rows) for name, rows in snapshot.items()}
        )
        return snapshot

    @BaseService.measure_operation("clear_all_data")
    def clear_all_data(self) -> None:
        """Remove every record from the store."""
        with self.transaction():
            clear_all_tables(self.db)
        self.db.expunge_all()
        self.logger.warning("All workspace data cleared")
