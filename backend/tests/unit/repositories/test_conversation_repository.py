from datetime import datetime, timedelta, timezone

import pytest

from tutorconnect.core.enums import UserRole
from tutorconnect.repositories.factory import RepositoryFactory


@pytest.fixture
def repository(db):
    return RepositoryFactory.create_conversation_repository(db)


def _fields(booking, **overrides):
    fields = dict(
        booking_id=booking.id,
        tutor_name=booking.tutor_name,
        student_name=booking.student_name,
        student_email=booking.student_email,
        subject=booking.subject,
        session_date=booking.requested_date,
        session_time=booking.requested_time,
        duration_minutes=booking.duration_minutes,
    )
    fields.update(overrides)
    return fields


def test_get_or_create(workspace, repository, booking_payload):
    booking = workspace.create_booking_request(booking_payload())

    created, was_created = repository.get_or_create("c1", **_fields(booking))
    again, again_created = repository.get_or_create("c1", **_fields(booking, subject="Other"))

    assert was_created is True
    assert again_created is False
    assert again is created
    assert again.subject == "Mathematics"


def test_unread_counters_per_role(workspace, repository, booking_payload):
    booking = workspace.create_booking_request(booking_payload())
    conversation, _ = repository.get_or_create("c1", **_fields(booking))

    repository.increment_unread(conversation, UserRole.TUTOR)
    repository.increment_unread(conversation, UserRole.TUTOR)
    repository.increment_unread(conversation, UserRole.STUDENT)
    assert (conversation.unread_count_tutor, conversation.unread_count_student) == (2, 1)

    repository.reset_unread(conversation, UserRole.TUTOR)
    assert (conversation.unread_count_tutor, conversation.unread_count_student) == (0, 1)


def test_find_for_user_orders_by_latest_activity(workspace, repository, booking_payload):
    booking = workspace.create_booking_request(booking_payload())
    older, _ = repository.get_or_create("older", **_fields(booking))
    newer, _ = repository.get_or_create("newer", **_fields(booking))
    now = datetime.now(timezone.utc)
    repository.update_preview(older, "hi", now + timedelta(minutes=5))
    repository.update_preview(newer, "hey", now)

    assert [c.id for c in repository.find_for_user("Mike", UserRole.TUTOR)] == ["older", "newer"]
    assert [c.id for c in repository.find_for_user("Sarah", UserRole.STUDENT)] == ["older", "newer"]
