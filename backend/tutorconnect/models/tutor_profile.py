# backend/tutorconnect/models/tutor_profile.py
"""Stored tutor profile flag used to resolve who is acting as tutor."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String

from ..core.ulid_helper import generate_ulid
from ..database import Base


class TutorProfile(Base):
    """A tutor's profile, visible to students only while ``is_live``."""

    __tablename__ = "tutor_profiles"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    user_name = Column(String(255), nullable=False, unique=True)
    is_live = Column(Boolean, nullable=False, default=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
