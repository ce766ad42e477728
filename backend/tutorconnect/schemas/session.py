# backend/tutorconnect/schemas/session.py
from datetime import datetime
from typing import List, Optional

from ._strict_base import RecordModel
from .base import Money


class TutoringSessionResponse(RecordModel):
    id: str
    booking_id: str
    tutor_name: str
    student_name: str
    student_email: str
    subject: str
    scheduled_date: str
    scheduled_time: str
    duration_minutes: int
    status: str
    meeting_link: str
    total_cost: Money
    materials: List[str]
    notes: str
    rating: Optional[int] = None
    created_at: datetime


class StudentSessionRecordResponse(RecordModel):
    id: str
    booking_id: str
    student_name: str
    student_email: str
    tutor_name: str
    subject: str
    session_date: str
    session_time: str
    duration_minutes: int
    cost: Money
    status: str
    created_at: datetime


class StudentRollupResponse(RecordModel):
    id: str
    tutor_name: str
    student_name: str
    student_email: str
    subject: str
    sessions_count: int
    total_earnings: Money
    first_session: str
    last_session: str
    status: str
    created_at: datetime
