# backend/tutorconnect/services/notification_templates.py
"""
Text templates for booking lifecycle notifications and the welcome message.

Templates take the booking as rendered by ``BookingResponse`` fields so
they stay independent of the ORM.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ..core.config import settings
from ..core.enums import NotificationType


@dataclass(frozen=True)
class NotificationTemplate:
    type: NotificationType
    title: str
    message: str

    def render(self, **context: Any) -> tuple[str, str]:
        """Return the (title, message) pair with ``context`` substituted."""
        return self.title.format(**context), self.message.format(**context)


BOOKING_REQUEST = NotificationTemplate(
    type=NotificationType.BOOKING_REQUEST,
    title="New Booking Request",
    message="{student_name} wants to book a session for {subject}",
)

BOOKING_CONFIRMED = NotificationTemplate(
    type=NotificationType.BOOKING_CONFIRMED,
    title="Booking Confirmed! 🎉",
    message="Your session with {tutor_name} has been confirmed for {requested_date}",
)

BOOKING_DECLINED = NotificationTemplate(
    type=NotificationType.BOOKING_DECLINED,
    title="Booking Request Declined",
    message=(
        "{tutor_name} is unavailable for your requested time. "
        "Please try a different slot."
    ),
)


WELCOME_MESSAGE = """🎉 Welcome {student_name}!

I'm excited to help you with {subject}! Here are the details of our upcoming session:

📅 **Session Details:**
• Date: {requested_date}
• Time: {requested_time}
• Duration: {duration_minutes} minutes
• Subject: {subject}
• Cost: {currency}{cost}

📚 **What to expect:**
• We'll cover the topics you mentioned: "{request_message}"
• Please come prepared with any specific questions
• I'll share materials and notes as we progress

💬 **Communication:**
• Use this chat for any questions before our session
• Share files, documents, or images if needed
• I typically respond within a few hours

Looking forward to our session! Feel free to ask any questions. 😊

Best regards,
{tutor_name}"""


def render_welcome_message(booking: Any) -> str:
    """Welcome text the tutor sends when a booking is confirmed."""
    cost = Decimal(booking.total_cost).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return WELCOME_MESSAGE.format(
        student_name=booking.student_name,
        subject=booking.subject,
        requested_date=booking.requested_date,
        requested_time=booking.requested_time,
        duration_minutes=booking.duration_minutes,
        currency=settings.currency_symbol,
        cost=cost,
        request_message=booking.message or "",
        tutor_name=booking.tutor_name,
    )
