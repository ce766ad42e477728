import pytest
from pydantic import ValidationError

from tutorconnect.core.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.message_preview_length == 50
    assert settings.meeting_base_url == "https://meet.jit.si"
    assert settings.meeting_room_prefix == "tutorconnect"
    assert settings.meeting_token_length == 6
    assert settings.currency_symbol == "₹"


def test_environment_prefix(monkeypatch):
    monkeypatch.setenv("TUTORCONNECT_MESSAGE_PREVIEW_LENGTH", "20")
    monkeypatch.setenv("TUTORCONNECT_DATABASE_URL", "sqlite:///:memory:")

    settings = Settings(_env_file=None)

    assert settings.message_preview_length == 20
    assert settings.database_url == "sqlite:///:memory:"


def test_meeting_base_url_trailing_slash_is_stripped():
    settings = Settings(_env_file=None, meeting_base_url="https://meet.example.org/")

    assert settings.meeting_base_url == "https://meet.example.org"


@pytest.mark.parametrize("field", ["message_preview_length", "meeting_token_length"])
def test_lengths_must_be_positive(field):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: 0})
