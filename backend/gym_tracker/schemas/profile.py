"""Profile Schemas — personal details shown and edited by the owner."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gym_tracker.core.domain_types import Gender
from gym_tracker.schemas.common import UtcDatetime, strip_or_none


class ProfileUpdate(BaseModel):
    """Partial update — only fields present in the request are written."""
    model_config = ConfigDict(use_enum_values=True)

    full_name: str | None = Field(None, max_length=200)
    date_of_birth: date | None = None
    gender: Gender | None = None
    height_cm: float | None = Field(None, gt=0, lt=300)

    @field_validator("full_name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return strip_or_none(v)


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    full_name: str | None
    date_of_birth: date | None
    gender: str | None
    height_cm: float | None
    created_at: UtcDatetime
    updated_at: UtcDatetime
