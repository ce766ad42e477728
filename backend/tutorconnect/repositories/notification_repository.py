# backend/tutorconnect/repositories/notification_repository.py
"""Notification Repository for the in-app inbox."""

from typing import Any, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models.notification import Notification
from .base_repository import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    def __init__(self, db: Session) -> None:
        super().__init__(db, Notification)

    def create_notification(
        self,
        user_name: str,
        type: str,
        title: str,
        message: Optional[str] = None,
        data: Optional[dict[str, Any]] = None,
    ) -> Notification:
        return self.create(
            user_name=user_name,
            type=type,
            title=title,
            message=message,
            data=data,
            read=False,
        )

    def get_user_notifications(self, user_name: str, unread_only: bool = False) -> List[Notification]:
        query = self._build_query().filter(Notification.user_name == user_name)
        if unread_only:
            query = query.filter(Notification.read.is_(False))
        query = query.order_by(Notification.created_at.desc(), Notification.id.desc())
        return self._execute_query(query)

    def get_unread_count(self, user_name: str) -> int:
        count = (
            self.db.query(func.count(Notification.id))
            .filter(Notification.user_name == user_name, Notification.read.is_(False))
            .scalar()
        )
        return int(count or 0)

    def mark_as_read(self, notification_id: str) -> bool:
        updated = (
            self.db.query(Notification)
            .filter(Notification.id == notification_id, Notification.read.is_(False))
            .update({"read": True}, synchronize_session="fetch")
        )
        return bool(updated)
