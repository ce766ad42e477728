import asyncio
from typing import Any, Callable, Dict

import pytest
from sqlalchemy.orm import Session

from tutorconnect.database import create_db_engine, create_session_factory, init_db
from tutorconnect.services.base import BaseService
from tutorconnect.workspace import Workspace


@pytest.fixture(scope="function")
def engine():
    engine = create_db_engine("sqlite:///:memory:", echo=False)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db(engine) -> Session:
    """Fresh session over an empty in-memory store."""
    session = create_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def workspace(db) -> Workspace:
    return Workspace(db)


@pytest.fixture(autouse=True)
def _reset_service_metrics():
    BaseService._class_metrics.clear()
    yield
    BaseService._class_metrics.clear()


@pytest.fixture
def booking_payload() -> Callable[..., Dict[str, Any]]:
    """Booking form payload; Sarah books Mike for 90 minutes at 800/h by default."""

    def _make(**overrides: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "tutor_id": "tutor-mike",
            "tutor_name": "Mike",
            "student_name": "Sarah",
            "student_email": "sarah@example.com",
            "subject": "Mathematics",
            "requested_date": "2024-05-20",
            "requested_time": "16:00",
            "duration": 90,
            "hourly_rate": 800,
            "message": "Help with calculus limits",
        }
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def confirmed_booking(workspace, booking_payload):
    booking = workspace.create_booking_request(booking_payload())
    return workspace.update_booking_status(booking.id, "confirmed")


class FakeUpload:
    """Stand-in for FastAPI's UploadFile."""

    def __init__(self, filename, content_type, content: bytes = b"", error: Exception = None):
        self.filename = filename
        self.content_type = content_type
        self._content = content
        self._error = error

    async def read(self, size: int = -1) -> bytes:
        await asyncio.sleep(0)
        if self._error is not None:
            raise self._error
        return self._content


@pytest.fixture
def fake_upload():
    return FakeUpload
