"""
Unit tests for BookingService.

Cover request creation, the pending -> confirmed/declined transition
and the confirmation fan-out.
"""

from decimal import Decimal
from unittest.mock import Mock

import pytest

from tutorconnect.core.enums import BookingStatus, NotificationType
from tutorconnect.core.exceptions import (
    InvalidStatusTransitionException,
    ServiceException,
    ValidationException,
)
from tutorconnect.models.booking import Booking
from tutorconnect.models.conversation import Conversation
from tutorconnect.models.message import Message
from tutorconnect.models.notification import Notification
from tutorconnect.models.student_rollup import StudentRollup
from tutorconnect.models.tutoring_session import StudentSessionRecord, TutoringSession
from tutorconnect.schemas.booking import BookingRequestCreate
from tutorconnect.services.booking_service import BookingService, calculate_total_cost
from tutorconnect.services.session_service import SessionService


@pytest.fixture
def booking_service(db) -> BookingService:
    return BookingService(db)


class TestCalculateTotalCost:
    def test_ninety_minutes_at_800(self):
        assert calculate_total_cost(800, 90) == Decimal("1200.00")

    def test_rounds_half_up_to_cents(self):
        # 10 * 1 / 60 = 0.1666...
        assert calculate_total_cost(10, 1) == Decimal("0.17")
        assert calculate_total_cost("0.3", 50) == Decimal("0.25")


class TestCreateBookingRequest:
    def test_creates_pending_booking_with_total_cost(self, db, booking_service, booking_payload):
        booking = booking_service.create_booking_request(booking_payload())

        assert booking.status == BookingStatus.PENDING.value
        assert booking.total_cost == Decimal("1200.00")
        assert booking.duration_minutes == 90
        assert booking.created_at is not None
        assert booking.updated_at is None
        assert db.query(Booking).count() == 1

    def test_accepts_a_request_model(self, booking_service, booking_payload):
        request = BookingRequestCreate.model_validate(booking_payload(message=None))

        booking = booking_service.create_booking_request(request)

        assert booking.message is None
        assert booking.is_pending

    def test_notifies_the_tutor(self, db, booking_service, booking_payload):
        booking = booking_service.create_booking_request(booking_payload())

        notification = db.query(Notification).one()
        assert notification.user_name == "Mike"
        assert notification.type == NotificationType.BOOKING_REQUEST.value
        assert notification.title == "New Booking Request"
        assert notification.message == "Sarah wants to book a session for Mathematics"
        assert notification.read is False
        assert notification.data["id"] == booking.id
        assert notification.data["total_cost"] == 1200.0

    def test_missing_field_is_rejected(self, db, booking_service, booking_payload):
        payload = booking_payload()
        del payload["student_email"]

        with pytest.raises(ValidationException) as exc_info:
            booking_service.create_booking_request(payload)

        assert exc_info.value.code == "INVALID_BOOKING_REQUEST"
        assert db.query(Booking).count() == 0

    def test_rates_of_any_numeric_form(self, booking_service, booking_payload):
        booking = booking_service.create_booking_request(
            booking_payload(hourly_rate="750.50", duration=60)
        )

        assert booking.total_cost == Decimal("750.50")

    def test_notification_failure_rolls_back_the_booking(self, db, booking_payload):
        notifications = Mock()
        notifications.notify.side_effect = ServiceException("sink unavailable")
        service = BookingService(db, notification_service=notifications)

        with pytest.raises(ServiceException):
            service.create_booking_request(booking_payload())

        assert db.query(Booking).count() == 0


class TestUpdateBookingStatus:
    def test_confirm_runs_the_full_workflow(self, db, booking_service, booking_payload):
        booking = booking_service.create_booking_request(booking_payload())

        updated = booking_service.update_booking_status(booking.id, "confirmed")

        assert updated.status == BookingStatus.CONFIRMED.value
        assert updated.updated_at is not None
        assert db.query(Conversation).count() == 1
        assert db.query(TutoringSession).count() == 1
        assert db.query(Message).filter_by(type="welcome").count() == 1
        assert db.query(StudentRollup).count() == 1
        assert db.query(StudentSessionRecord).count() == 1

    def test_confirmation_notification_payload(self, db, booking_service, booking_payload):
        booking = booking_service.create_booking_request(booking_payload())
        booking_service.update_booking_status(booking.id, BookingStatus.CONFIRMED)

        notification = db.query(Notification).filter_by(user_name="Sarah").one()
        session = db.query(TutoringSession).one()
        assert notification.type == NotificationType.BOOKING_CONFIRMED.value
        assert notification.title == "Booking Confirmed! 🎉"
        assert notification.message == "Your session with Mike has been confirmed for 2024-05-20"
        assert notification.data["booking"]["status"] == "confirmed"
        assert notification.data["session"]["meeting_link"] == session.meeting_link
        assert notification.data["conversation_id"] == f"Mike_Sarah_{booking.id}"

    def test_workflow_steps_run_in_order(self, db, booking_payload):
        calls = []
        conversation = Mock(id="conv-1")
        conversation_service = Mock()
        conversation_service.create_conversation.side_effect = lambda b: (
            calls.append("conversation") or conversation
        )
        session_service = SessionService(db)
        create_session = session_service.create_session
        session_service.create_session = lambda b: calls.append("session") or create_session(b)
        message_service = Mock()
        message_service.send_welcome_message.side_effect = lambda b, cid: calls.append("welcome")
        rollup_service = Mock()
        rollup_service.add_to_my_students.side_effect = lambda b: calls.append("my_students")
        rollup_service.add_to_my_sessions.side_effect = lambda b: calls.append("my_sessions")
        notification_service = Mock()
        notification_service.notify.side_effect = lambda user, template, **kw: calls.append(
            template.type.value
        )

        service = BookingService(
            db,
            notification_service=notification_service,
            conversation_service=conversation_service,
            session_service=session_service,
            message_service=message_service,
            rollup_service=rollup_service,
        )
        booking = service.create_booking_request(booking_payload())
        calls.clear()

        service._run_confirmation_workflow(booking)

        assert calls == [
            "conversation",
            "session",
            "welcome",
            "my_students",
            "my_sessions",
            "booking_confirmed",
        ]
        message_service.send_welcome_message.assert_called_once_with(booking, "conv-1")

    def test_decline_notifies_student_only(self, db, booking_service, booking_payload):
        booking = booking_service.create_booking_request(booking_payload())

        updated = booking_service.update_booking_status(booking.id, "declined")

        assert updated.status == BookingStatus.DECLINED.value
        assert db.query(Conversation).count() == 0
        assert db.query(TutoringSession).count() == 0
        assert db.query(StudentRollup).count() == 0
        declined = db.query(Notification).filter_by(user_name="Sarah").one()
        assert declined.type == NotificationType.BOOKING_DECLINED.value

    def test_reconfirming_is_a_no_op(self, db, booking_service, booking_payload):
        booking = booking_service.create_booking_request(booking_payload())
        booking_service.update_booking_status(booking.id, "confirmed")

        again = booking_service.update_booking_status(booking.id, "confirmed")

        assert again.id == booking.id
        assert db.query(Conversation).count() == 1
        assert db.query(TutoringSession).count() == 1
        assert db.query(StudentRollup).one().sessions_count == 1
        assert db.query(StudentSessionRecord).count() == 1

    def test_terminal_status_cannot_flip(self, booking_service, booking_payload):
        booking = booking_service.create_booking_request(booking_payload())
        booking_service.update_booking_status(booking.id, "declined")

        with pytest.raises(InvalidStatusTransitionException):
            booking_service.update_booking_status(booking.id, "confirmed")

        assert booking_service.get_booking(booking.id).status == "declined"

    @pytest.mark.parametrize("status", ["pending", "cancelled", ""])
    def test_only_confirm_or_decline_is_accepted(self, booking_service, booking_payload, status):
        booking = booking_service.create_booking_request(booking_payload())

        with pytest.raises(ValidationException) as exc_info:
            booking_service.update_booking_status(booking.id, status)

        assert exc_info.value.code == "INVALID_BOOKING_STATUS"

    def test_unknown_booking_returns_none(self, db, booking_service):
        assert booking_service.update_booking_status("missing", "confirmed") is None
        assert db.query(Notification).count() == 0

    def test_malformed_id_skips_the_lookup(self, db):
        service = BookingService(db)
        service.repository = Mock()

        assert service.update_booking_status("not-a-ulid", "confirmed") is None
        assert service.get_booking(42) is None
        service.repository.get_by_id.assert_not_called()

    def test_failed_step_leaves_booking_pending(self, db, booking_payload):
        rollup_service = Mock()
        rollup_service.add_to_my_students.side_effect = ServiceException("rollup failed")
        service = BookingService(db, rollup_service=rollup_service)
        booking = service.create_booking_request(booking_payload())

        with pytest.raises(ServiceException):
            service.update_booking_status(booking.id, "confirmed")

        db.expire_all()
        assert service.get_booking(booking.id).status == "pending"
        assert db.query(Conversation).count() == 0
        assert db.query(TutoringSession).count() == 0
        assert db.query(Message).count() == 0


class TestBookingQueries:
    def test_tutor_bookings_match_case_insensitively(self, booking_service, booking_payload):
        booking_service.create_booking_request(booking_payload())
        booking_service.create_booking_request(booking_payload(tutor_name="Priya"))

        bookings = booking_service.get_tutor_bookings("mike")

        assert [b.tutor_name for b in bookings] == ["Mike"]

    def test_student_bookings_by_email(self, booking_service, booking_payload):
        first = booking_service.create_booking_request(booking_payload())
        second = booking_service.create_booking_request(booking_payload(subject="Physics"))
        booking_service.create_booking_request(booking_payload(student_email="ana@example.com"))

        bookings = booking_service.get_student_bookings("sarah@example.com")

        assert [b.id for b in bookings] == [first.id, second.id]
