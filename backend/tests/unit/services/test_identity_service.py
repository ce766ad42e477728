import pytest

from tutorconnect.core.enums import UserRole
from tutorconnect.core.exceptions import ValidationException
from tutorconnect.services.identity_service import IdentityService


@pytest.fixture
def identity_service(db) -> IdentityService:
    return IdentityService(db)


def test_unknown_user_is_a_student(identity_service):
    assert identity_service.resolve_role("Sarah") == UserRole.STUDENT


def test_live_profile_makes_a_tutor(identity_service):
    identity_service.go_live("Mike")

    assert identity_service.is_live("Mike") is True
    assert identity_service.resolve_role("Mike") == UserRole.TUTOR


def test_offline_tutor_resolves_as_student(identity_service):
    identity_service.go_live("Mike")
    identity_service.go_offline("Mike")

    assert identity_service.resolve_role("Mike") == UserRole.STUDENT


def test_explicit_role_wins(identity_service):
    identity_service.go_live("Mike")

    assert identity_service.resolve_role("Mike", "student") == UserRole.STUDENT
    assert identity_service.resolve_role("Sarah", UserRole.TUTOR) == UserRole.TUTOR


def test_invalid_role(identity_service):
    with pytest.raises(ValidationException) as exc_info:
        identity_service.resolve_role("Sarah", "admin")

    assert exc_info.value.code == "INVALID_ROLE"


def test_live_tutors_exclude_current_user(identity_service):
    identity_service.go_live("Mike")
    identity_service.go_live("Priya")
    identity_service.go_live("Omar")
    identity_service.go_offline("Omar")

    assert sorted(identity_service.list_live_tutors()) == ["Mike", "Priya"]
    assert identity_service.list_live_tutors(exclude_name="Mike") == ["Priya"]
