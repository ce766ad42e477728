# backend/tutorconnect/schemas/notification.py
from datetime import datetime
from typing import Any, Optional

from ._strict_base import RecordModel


class NotificationResponse(RecordModel):
    id: str
    user_name: str
    type: str
    title: str
    message: Optional[str] = None
    data: Optional[Any] = None
    read: bool
    created_at: datetime
