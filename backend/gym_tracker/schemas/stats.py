"""Stats Schemas — persisted personal records as returned to the owner."""

from uuid import UUID

from pydantic import BaseModel

from gym_tracker.schemas.common import UtcDatetime


class PersonalRecordResponse(BaseModel):
    id: UUID
    exercise_id: UUID
    exercise_name: str
    record_type: str
    value: float
    unit: str
    achieved_at: UtcDatetime
    set_id: UUID | None
    notes: str | None
