# backend/tutorconnect/schemas/conversation.py
from datetime import datetime

from ._strict_base import RecordModel


class ConversationResponse(RecordModel):
    id: str
    booking_id: str
    tutor_name: str
    student_name: str
    student_email: str
    subject: str
    session_date: str
    session_time: str
    duration_minutes: int
    status: str
    last_message: str
    last_message_time: datetime
    unread_count_tutor: int
    unread_count_student: int
    typing_tutor: bool
    typing_student: bool
    created_at: datetime
