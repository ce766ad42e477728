# backend/tutorconnect/services/booking_service.py
"""
Booking Service for the TutorConnect workflow engine.

Owns the booking lifecycle:
- Creating pending booking requests (and notifying the tutor)
- The pending -> confirmed / declined transition
- Fanning a confirmation out to the conversation, session, welcome
  message, rollups and the student's notification

Bookings move out of pending exactly once. Re-applying the current
status is a no-op so a confirmation can never be counted twice.
"""

from decimal import ROUND_HALF_UP, Decimal
import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..core.enums import BookingStatus
from ..core.exceptions import InvalidStatusTransitionException, ValidationException
from ..core.ulid_helper import is_valid_ulid
from ..models.booking import Booking
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.booking_repository import BookingRepository
from ..repositories.factory import RepositoryFactory
from ..schemas.booking import BookingRequestCreate, BookingResponse
from ..schemas.session import TutoringSessionResponse
from .base import BaseService
from .conversation_service import ConversationService
from .message_service import MessageService
from .notification_service import NotificationService
from .notification_templates import BOOKING_CONFIRMED, BOOKING_DECLINED, BOOKING_REQUEST
from .rollup_service import RollupService
from .session_service import SessionService

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
MINUTES_PER_HOUR = Decimal(60)


def calculate_total_cost(hourly_rate: Union[Decimal, int, float, str], duration_minutes: int) -> Decimal:
    """Price of a booking: ``hourly_rate * duration / 60``, rounded to cents."""
    cost = Decimal(str(hourly_rate)) * Decimal(duration_minutes) / MINUTES_PER_HOUR
    return cost.quantize(CENTS, rounding=ROUND_HALF_UP)


class BookingService(BaseService):
    """
    Booking ledger and confirmation orchestrator.

    The collaborating services share this service's session, so the
    whole confirmation fan-out commits once.
    """

    def __init__(
        self,
        db: Session,
        notification_service: Optional[NotificationService] = None,
        conversation_service: Optional[ConversationService] = None,
        session_service: Optional[SessionService] = None,
        message_service: Optional[MessageService] = None,
        rollup_service: Optional[RollupService] = None,
        repository: Optional[BookingRepository] = None,
    ):
        """
        Initialize booking service.

        Args:
            db: Database session
            notification_service: Optional notification sink
            conversation_service: Optional conversation manager
            session_service: Optional session ledger
            message_service: Optional message store
            rollup_service: Optional rollup engine
            repository: Optional booking repository
        """
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_booking_repository(db)
        self.notification_service = notification_service or NotificationService(db)
        self.conversation_service = conversation_service or ConversationService(db)
        self.session_service = session_service or SessionService(db)
        self.message_service = message_service or MessageService(db)
        self.rollup_service = rollup_service or RollupService(db)

    @BaseService.measure_operation("create_booking_request")
    def create_booking_request(
        self, data: Union[BookingRequestCreate, Mapping[str, Any]]
    ) -> Booking:
        """
        Store a pending booking request and notify the tutor.

        Args:
            data: BookingRequestCreate or an equivalent mapping

        Returns:
            The stored booking

        Raises:
            ValidationException: If a required field is missing or mistyped
        """
        request = self._coerce_request(data)
        total_cost = calculate_total_cost(request.hourly_rate, request.duration_minutes)

        with self.transaction():
            booking = self.repository.create(
                tutor_id=request.tutor_id,
                tutor_name=request.tutor_name,
                student_name=request.student_name,
                student_email=request.student_email,
                subject=request.subject,
                requested_date=request.requested_date,
                requested_time=request.requested_time,
                duration_minutes=request.duration_minutes,
                hourly_rate=request.hourly_rate,
                total_cost=total_cost,
                message=request.message,
                status=BookingStatus.PENDING.value,
            )
            self.notification_service.notify(
                booking.tutor_name,
                BOOKING_REQUEST,
                data=self._booking_payload(booking),
                student_name=booking.student_name,
                subject=booking.subject,
            )

        prometheus_metrics.record_booking_transition(BookingStatus.PENDING.value)
        self.logger.info(
            f"Booking request {booking.id} created for tutor {booking.tutor_name}",
            extra={"booking_id": booking.id, "total_cost": str(total_cost)},
        )
        return booking

    @BaseService.measure_operation("update_booking_status")
    def update_booking_status(
        self, booking_id: Union[str, int], status: Union[BookingStatus, str]
    ) -> Optional[Booking]:
        """
        Confirm or decline a booking request.

        Args:
            booking_id: Booking to transition
            status: "confirmed" or "declined"

        Returns:
            The booking, or None if no booking has that id

        Raises:
            ValidationException: If status is not confirmed/declined
            InvalidStatusTransitionException: If the booking already reached
                the other terminal status
        """
        new_status = self._parse_target_status(status)

        booking = self._find_booking(booking_id)
        if not booking:
            self.logger.warning(f"Booking not found: {booking_id}")
            return None

        current_status = BookingStatus(booking.status)
        if current_status == new_status:
            self.logger.info(
                f"Booking {booking.id} is already {new_status.value}; nothing to do",
                extra={"booking_id": booking.id},
            )
            return booking
        if current_status.is_terminal:
            raise InvalidStatusTransitionException(
                booking.id, current_status.value, new_status.value
            )

        with self.transaction():
            self.repository.set_status(booking, new_status)
            if new_status == BookingStatus.CONFIRMED:
                self._run_confirmation_workflow(booking)
            else:
                self.notification_service.notify(
                    booking.student_name,
                    BOOKING_DECLINED,
                    data=self._booking_payload(booking),
                    tutor_name=booking.tutor_name,
                )

        prometheus_metrics.record_booking_transition(new_status.value)
        self.logger.info(
            f"Booking {booking.id} {new_status.value}",
            extra={"booking_id": booking.id, "status": new_status.value},
        )
        return booking

    def _run_confirmation_workflow(self, booking: Booking) -> None:
        """
        Fan a confirmation out in its fixed order.

        1. conversation  2. session  3. welcome message
        4. my students  5. my sessions  6. student notification
        """
        conversation = self.conversation_service.create_conversation(booking)
        session = self.session_service.create_session(booking)
        self.message_service.send_welcome_message(booking, conversation.id)
        self.rollup_service.add_to_my_students(booking)
        self.rollup_service.add_to_my_sessions(booking)
        self.notification_service.notify(
            booking.student_name,
            BOOKING_CONFIRMED,
            data={
                "booking": self._booking_payload(booking),
                "session": TutoringSessionResponse.model_validate(session).model_dump(mode="json"),
                "conversation_id": conversation.id,
            },
            tutor_name=booking.tutor_name,
            requested_date=booking.requested_date,
        )
        self.logger.debug(
            f"Confirmation workflow finished for booking {booking.id}",
            extra={"booking_id": booking.id, "conversation_id": conversation.id},
        )

    @BaseService.measure_operation("get_booking")
    def get_booking(self, booking_id: Union[str, int]) -> Optional[Booking]:
        return self._find_booking(booking_id)

    def _find_booking(self, booking_id: Union[str, int]) -> Optional[Booking]:
        """Booking ids are ULIDs; anything else cannot match a stored booking."""
        if not is_valid_ulid(str(booking_id)):
            return None
        return self.repository.get_by_id(str(booking_id))

    @BaseService.measure_operation("get_tutor_bookings")
    def get_tutor_bookings(self, tutor_name: str) -> List[Booking]:
        """Bookings addressed to ``tutor_name`` (case-insensitive)."""
        return self.repository.find_for_tutor(tutor_name)

    @BaseService.measure_operation("get_student_bookings")
    def get_student_bookings(self, student_email: str) -> List[Booking]:
        return self.repository.find_for_student(student_email)

    @staticmethod
    def _booking_payload(booking: Booking) -> dict[str, Any]:
        return BookingResponse.model_validate(booking).model_dump(mode="json")

    @staticmethod
    def _parse_target_status(status: Union[BookingStatus, str]) -> BookingStatus:
        try:
            target = BookingStatus(status)
        except ValueError:
            target = None
        if target not in (BookingStatus.CONFIRMED, BookingStatus.DECLINED):
            raise ValidationException(
                f"Booking status must be confirmed or declined, got {status!r}",
                code="INVALID_BOOKING_STATUS",
                details={"status": str(status)},
            )
        return target

    @staticmethod
    def _coerce_request(
        data: Union[BookingRequestCreate, Mapping[str, Any]]
    ) -> BookingRequestCreate:
        if isinstance(data, BookingRequestCreate):
            return data
        try:
            return BookingRequestCreate.model_validate(dict(data))
        except ValidationError as exc:
            raise ValidationException(
                "Invalid booking request",
                code="INVALID_BOOKING_REQUEST",
                details={"errors": exc.errors(include_url=False, include_context=False)},
            ) from exc
