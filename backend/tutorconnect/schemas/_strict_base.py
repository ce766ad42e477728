"""Model bases: closed request payloads and ORM-backed records."""

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Rejects unknown keys and re-validates on assignment."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class StrictRequestModel(StrictModel):
    """Payload accepted from a UI collaborator."""


class RecordModel(BaseModel):
    """Read view of a stored row; enums come out as their string values."""

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
