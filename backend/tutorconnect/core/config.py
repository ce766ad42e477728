# backend/tutorconnect/core/config.py
import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Runtime configuration for the booking workflow engine."""

    model_config = SettingsConfigDict(
        env_prefix="TUTORCONNECT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "development"

    # Embedded store (one database per browser/client profile)
    database_url: str = Field(
        default="sqlite:///./tutorconnect.db",
        description="SQLAlchemy URL of the local durable store",
    )
    sql_echo: bool = False

    # Messaging
    message_preview_length: int = Field(
        default=50, description="Characters of a message kept as the conversation preview"
    )

    # Video sessions
    meeting_base_url: str = "https://meet.jit.si"
    meeting_room_prefix: str = "tutorconnect"
    meeting_token_length: int = 6

    currency_symbol: str = "₹"

    # Monitoring
    slow_operation_threshold_seconds: float = 1.0

    @field_validator("meeting_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("message_preview_length", "meeting_token_length")
    @classmethod
    def must_be_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value


settings = Settings()
