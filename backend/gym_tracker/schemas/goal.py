"""Goal Schemas — targets a user tracks over time.

Invariants:
    - target_date, when given, is not before start_date
    - start_date defaults to today (UTC)
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from gym_tracker.core.clock import utcnow
from gym_tracker.core.domain_types import GoalStatus, GoalType
from gym_tracker.schemas.common import UtcDatetime, strip_or_none


def _today() -> date:
    return utcnow().date()


class GoalCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    goal_type: GoalType
    target_value: float | None = Field(None, gt=0)
    target_unit: str | None = Field(None, max_length=30)
    current_value: float | None = Field(None, ge=0)
    start_date: date = Field(default_factory=_today)
    target_date: date | None = None
    status: GoalStatus = GoalStatus.ACTIVE.value

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", "target_unit")
    @classmethod
    def strip_optional(cls, v: str | None) -> str | None:
        return strip_or_none(v)

    @model_validator(mode="after")
    def check_dates(self):
        if self.target_date is not None and self.target_date < self.start_date:
            raise ValueError("target_date must not be before start_date")
        return self


class GoalUpdate(BaseModel):
    """Partial update; date ordering is re-checked against the stored row."""
    model_config = ConfigDict(use_enum_values=True)

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    goal_type: GoalType | None = None
    target_value: float | None = Field(None, gt=0)
    target_unit: str | None = Field(None, max_length=30)
    current_value: float | None = Field(None, ge=0)
    start_date: date | None = None
    target_date: date | None = None
    status: GoalStatus | None = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v):
        return v.strip() if isinstance(v, str) else v


class GoalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    description: str | None
    goal_type: str
    target_value: float | None
    target_unit: str | None
    current_value: float | None
    start_date: date
    target_date: date | None
    completed_at: UtcDatetime | None
    status: str
    created_at: UtcDatetime
    updated_at: UtcDatetime
