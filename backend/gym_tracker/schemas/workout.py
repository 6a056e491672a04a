"""Workout Schemas — logging a workout as a flat list of sets, editing and reading it back.

Invariants:
    - WorkoutCreate.sets has at least one set
    - (exercise_id, set_number) is unique within one submitted workout
    - All datetimes are normalized to UTC before reaching services
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from gym_tracker.core.workout_layout import find_duplicate_set_numbers
from gym_tracker.schemas.common import UtcDatetime, strip_or_none


class WorkoutSetCreate(BaseModel):
    exercise_id: UUID
    set_number: int = Field(gt=0)
    weight_kg: float = Field(ge=0)
    reps: int = Field(gt=0)


class WorkoutCreate(BaseModel):
    workout_date: UtcDatetime
    duration_minutes: int | None = Field(None, gt=0)
    notes: str | None = Field(None, max_length=1000)
    sets: list[WorkoutSetCreate] = Field(min_length=1)

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v: str | None) -> str | None:
        return strip_or_none(v)

    @model_validator(mode="after")
    def reject_repeated_set_numbers(self):
        duplicates = find_duplicate_set_numbers(self.sets)
        if duplicates:
            exercise_id, set_number = duplicates[0]
            raise ValueError(
                f"set_number {set_number} is repeated for exercise {exercise_id}"
            )
        return self


class WorkoutUpdate(BaseModel):
    """Partial update — only fields present in the request are written."""
    name: str | None = Field(None, min_length=1, max_length=200)
    notes: str | None = Field(None, max_length=1000)
    completed_at: UtcDatetime | None = None
    duration_minutes: int | None = Field(None, gt=0)
    calories_burned: int | None = Field(None, ge=0)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class WorkoutResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    name: str
    notes: str | None
    started_at: UtcDatetime
    completed_at: UtcDatetime | None
    duration_minutes: int | None
    calories_burned: int | None
    created_at: UtcDatetime
    updated_at: UtcDatetime


class WorkoutSummaryResponse(WorkoutResponse):
    total_sets: int
    exercises_count: int


class SetResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    workout_exercise_id: UUID
    exercise_id: UUID
    set_number: int
    reps: int | None
    weight_kg: float | None
    duration_seconds: int | None
    distance_meters: float | None
    rpe: int | None
    notes: str | None
    created_at: UtcDatetime


class WorkoutDetailResponse(WorkoutResponse):
    sets: list[SetResponse]
