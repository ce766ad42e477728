from fastapi import HTTPException

from tutorconnect.core.exceptions import (
    BusinessRuleException,
    DomainException,
    FileReadException,
    InvalidStatusTransitionException,
    NotFoundException,
    ServiceException,
    ValidationException,
)


class TestDomainExceptions:
    def test_code_defaults_to_class_name(self):
        exc = NotFoundException("Booking not found")

        assert exc.code == "NotFoundException"
        assert exc.details == {}
        assert str(exc) == "Booking not found"

    def test_http_status_per_exception(self):
        assert ValidationException("x").to_http_exception().status_code == 400
        assert NotFoundException("x").to_http_exception().status_code == 404
        assert BusinessRuleException("x").to_http_exception().status_code == 422
        assert ServiceException("x").to_http_exception().status_code == 500

    def test_http_detail_carries_code_and_details(self):
        http_exc = ValidationException(
            "bad role", code="INVALID_ROLE", details={"role": "admin"}
        ).to_http_exception()

        assert isinstance(http_exc, HTTPException)
        assert http_exc.detail == {
            "message": "bad role",
            "code": "INVALID_ROLE",
            "details": {"role": "admin"},
        }

    def test_invalid_status_transition(self):
        exc = InvalidStatusTransitionException("b1", "declined", "confirmed")

        assert isinstance(exc, BusinessRuleException)
        assert exc.code == "INVALID_STATUS_TRANSITION"
        assert exc.details["current_status"] == "declined"
        assert "cannot become confirmed" in exc.message

    def test_file_read_failure_is_a_service_error(self):
        exc = FileReadException(None, "disk gone")

        assert isinstance(exc, ServiceException)
        assert isinstance(exc, DomainException)
        assert exc.code == "FILE_READ_FAILED"
        assert "<unnamed>" in exc.message
