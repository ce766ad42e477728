# backend/tutorconnect/core/exceptions.py
"""
Errors raised by the workflow engine.

Each domain error carries a stable ``code`` and a ``details`` dict, and
knows the HTTP status a route collaborator should answer with.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class DomainException(Exception):
    """Root of the engine's error hierarchy (HTTP 500 unless overridden)."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        """HTTPException carrying message, code and details."""
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Malformed or incomplete input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """A referenced record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class BusinessRuleException(DomainException):
    """Input is well formed but the current state forbids it."""

    status_code = HTTP_422_UNPROCESSABLE


class ServiceException(DomainException):
    """A service could not complete an operation."""


class InvalidStatusTransitionException(BusinessRuleException):
    """Raised when a booking is moved out of a terminal status."""

    def __init__(self, booking_id: str, current_status: str, requested_status: str):
        super().__init__(
            message=f"Booking {booking_id} is already {current_status} and cannot become {requested_status}",
            code="INVALID_STATUS_TRANSITION",
            details={
                "booking_id": booking_id,
                "current_status": current_status,
                "requested_status": requested_status,
            },
        )


class FileReadException(ServiceException):
    """Raised when the bytes of an uploaded file cannot be read."""

    def __init__(self, file_name: Optional[str], reason: str):
        super().__init__(
            message=f"Failed to read uploaded file {file_name or '<unnamed>'}: {reason}",
            code="FILE_READ_FAILED",
            details={"file_name": file_name},
        )


class RepositoryException(Exception):
    """A data access call failed (query error or constraint violation)."""
