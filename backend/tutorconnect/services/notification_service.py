# backend/tutorconnect/services/notification_service.py
"""
Notification Service for the TutorConnect workflow engine.

Appends user-addressed notifications for booking lifecycle events and
serves each user's inbox.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from ..models.notification import Notification
from ..repositories.factory import RepositoryFactory
from ..repositories.notification_repository import NotificationRepository
from .base import BaseService
from .notification_templates import NotificationTemplate

logger = logging.getLogger(__name__)


class NotificationService(BaseService):
    """Notification sink addressed by display name."""

    def __init__(
        self,
        db: Session,
        notification_repository: Optional[NotificationRepository] = None,
    ):
        super().__init__(db)
        self.notification_repository = (
            notification_repository or RepositoryFactory.create_notification_repository(db)
        )

    @BaseService.measure_operation("add_notification")
    def add_notification(
        self,
        user_name: str,
        type: str,
        title: str,
        message: Optional[str] = None,
        data: Optional[Any] = None,
    ) -> Notification:
        """
        Append a notification for ``user_name``.

        ``data`` must be JSON serializable; it is stored as given.
        """
        with self.transaction():
            notification = self.notification_repository.create_notification(
                user_name=user_name,
                type=type,
                title=title,
                message=message,
                data=data,
            )
        self.logger.info(
            f"Notification {type} queued for {user_name}",
            extra={"notification_id": notification.id, "notification_type": type},
        )
        return notification

    def notify(
        self, user_name: str, template: NotificationTemplate, data: Any, **context: Any
    ) -> Notification:
        """Render ``template`` with ``context`` and append it for ``user_name``."""
        title, message = template.render(**context)
        return self.add_notification(
            user_name=user_name,
            type=template.type.value,
            title=title,
            message=message,
            data=data,
        )

    @BaseService.measure_operation("get_user_notifications")
    def get_user_notifications(self, user_name: str, unread_only: bool = False) -> List[Notification]:
        """Notifications for ``user_name``, newest first."""
        return self.notification_repository.get_user_notifications(user_name, unread_only=unread_only)

    @BaseService.measure_operation("get_unread_count")
    def get_unread_count(self, user_name: str) -> int:
        return self.notification_repository.get_unread_count(user_name)

    @BaseService.measure_operation("mark_notification_read")
    def mark_as_read(self, notification_id: str) -> bool:
        """Mark one notification read. Returns False if missing or already read."""
        with self.transaction():
            return self.notification_repository.mark_as_read(notification_id)
