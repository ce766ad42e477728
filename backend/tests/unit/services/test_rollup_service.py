from decimal import Decimal

import pytest

from tutorconnect.services.rollup_service import RollupService


@pytest.fixture
def rollup_service(db) -> RollupService:
    return RollupService(db)


def test_first_confirmation_creates_the_rollup(rollup_service, confirmed_booking):
    rollup = rollup_service.get_my_students("Mike")[0]

    assert rollup.student_email == "sarah@example.com"
    assert rollup.sessions_count == 1
    assert rollup.total_earnings == Decimal("1200.00")
    assert rollup.first_session == rollup.last_session == "2024-05-20"
    assert rollup.status == "active"


def test_repeat_student_accumulates(workspace, rollup_service, booking_payload):
    first = workspace.create_booking_request(booking_payload())
    second = workspace.create_booking_request(
        booking_payload(requested_date="2024-05-27", duration=60)
    )
    workspace.update_booking_status(first.id, "confirmed")
    workspace.update_booking_status(second.id, "confirmed")

    rollups = rollup_service.get_my_students("Mike")

    assert len(rollups) == 1
    assert rollups[0].sessions_count == 2
    assert rollups[0].total_earnings == Decimal("2000.00")
    assert rollups[0].first_session == "2024-05-20"
    assert rollups[0].last_session == "2024-05-27"


def test_rollup_is_keyed_by_email_not_name(workspace, rollup_service, booking_payload):
    for email in ("sarah@example.com", "sarah.r@example.com"):
        booking = workspace.create_booking_request(booking_payload(student_email=email))
        workspace.update_booking_status(booking.id, "confirmed")

    assert len(rollup_service.get_my_students("Mike")) == 2


def test_my_sessions_are_never_deduplicated(workspace, rollup_service, booking_payload):
    for _ in range(2):
        booking = workspace.create_booking_request(booking_payload())
        workspace.update_booking_status(booking.id, "confirmed")

    records = rollup_service.get_my_sessions("sarah@example.com")

    assert len(records) == 2
    assert {r.status for r in records} == {"confirmed"}
    assert {r.cost for r in records} == {Decimal("1200.00")}
    booked = workspace.get_student_bookings("sarah@example.com")
    assert {r.booking_id for r in records} == {b.id for b in booked}


def test_rollups_are_scoped_to_the_tutor(rollup_service, confirmed_booking):
    assert rollup_service.get_my_students("Priya") == []
    assert rollup_service.get_my_sessions("ana@example.com") == []
