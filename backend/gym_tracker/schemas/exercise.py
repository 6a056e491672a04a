"""Exercise Schemas — create/update payloads and the public exercise shape.

Invariants:
    - Names are trimmed and 1..100 characters after trimming
    - Descriptions are at most 500 characters; blank descriptions become None
    - The public shape exposes muscle_group / equipment_type as single values,
      stored as the first element of the persisted lists
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gym_tracker.core.domain_types import (
    EquipmentType, ExerciseCategory, MuscleGroup,
)
from gym_tracker.schemas.common import UtcDatetime, strip_or_none


def _strip_name(value):
    return value.strip() if isinstance(value, str) else value


class ExerciseCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(min_length=1, max_length=100)
    muscle_group: MuscleGroup
    equipment_type: EquipmentType
    description: str | None = Field(None, max_length=500)
    category: ExerciseCategory = ExerciseCategory.STRENGTH.value

    strip_name = field_validator("name", mode="before")(_strip_name)

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str | None) -> str | None:
        return strip_or_none(v)


class ExerciseUpdate(BaseModel):
    """Partial update — only fields present in the request are written."""
    model_config = ConfigDict(use_enum_values=True)

    name: str | None = Field(None, min_length=1, max_length=100)
    muscle_group: MuscleGroup | None = None
    equipment_type: EquipmentType | None = None
    description: str | None = Field(None, max_length=500)
    category: ExerciseCategory | None = None

    strip_name = field_validator("name", mode="before")(_strip_name)

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str | None) -> str | None:
        return strip_or_none(v)


class ExerciseResponse(BaseModel):
    id: UUID
    user_id: UUID | None
    name: str
    description: str | None
    category: str
    muscle_group: str | None
    equipment_type: str | None
    created_at: UtcDatetime
    updated_at: UtcDatetime

    @classmethod
    def from_model(cls, exercise) -> "ExerciseResponse":
        return cls(
            id=exercise.id,
            user_id=exercise.user_id,
            name=exercise.name,
            description=exercise.description,
            category=exercise.category,
            muscle_group=exercise.primary_muscle_group,
            equipment_type=exercise.primary_equipment,
            created_at=exercise.created_at,
            updated_at=exercise.updated_at,
        )
