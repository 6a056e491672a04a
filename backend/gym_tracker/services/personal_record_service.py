"""Personal Record Service — keeps persisted records in step with newly logged sets.

Invariants:
    - Runs inside the caller's transaction (flushes, never commits)
    - Sets are applied in insertion order; a later set must strictly beat the
      record (including one set earlier in the same batch) to replace it
    - One row per (user, exercise, record_type): existing rows are updated in place
"""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gym_tracker.core.clock import utcnow
from gym_tracker.core.domain_types import RecordType
from gym_tracker.core.personal_records import TRACKED_METRICS, detect_record_updates
from gym_tracker.models import Exercise, ExerciseSet, PersonalRecord
from gym_tracker.schemas.stats import PersonalRecordResponse


async def apply_new_sets(
    db: AsyncSession,
    user_id: uuid.UUID,
    exercise_id: uuid.UUID,
    new_sets: list[ExerciseSet],
) -> list[PersonalRecord]:
    """Upsert records beaten by new_sets; returns the rows that changed."""
    rows = await db.scalars(
        select(PersonalRecord).where(
            PersonalRecord.user_id == user_id,
            PersonalRecord.exercise_id == exercise_id,
        )
    )
    records: dict[RecordType, PersonalRecord] = {
        RecordType(r.record_type): r for r in rows
    }

    changed: dict[RecordType, PersonalRecord] = {}
    for logged in new_sets:
        values = {attr: getattr(logged, attr) for attr, _, _ in TRACKED_METRICS}
        current = {kind: float(r.value) for kind, r in records.items()}
        for update in detect_record_updates(values, current):
            record = records.get(update.record_type)
            if record is None:
                record = PersonalRecord(
                    user_id=user_id,
                    exercise_id=exercise_id,
                    record_type=update.record_type.value,
                )
                db.add(record)
                records[update.record_type] = record
            record.value = update.value
            record.unit = update.unit.value
            record.achieved_at = utcnow()
            record.set_id = logged.id
            changed[update.record_type] = record

    if changed:
        await db.flush()
    return list(changed.values())


async def list_records(
    db: AsyncSession, user_id: uuid.UUID,
) -> list[PersonalRecordResponse]:
    """Stored records with exercise names, newest first."""
    result = await db.execute(
        select(PersonalRecord, Exercise.name)
        .join(Exercise, Exercise.id == PersonalRecord.exercise_id)
        .where(PersonalRecord.user_id == user_id)
        .order_by(PersonalRecord.achieved_at.desc(), PersonalRecord.record_type)
    )
    return [
        PersonalRecordResponse(
            id=record.id,
            exercise_id=record.exercise_id,
            exercise_name=name,
            record_type=record.record_type,
            value=record.value,
            unit=record.unit,
            achieved_at=record.achieved_at,
            set_id=record.set_id,
            notes=record.notes,
        )
        for record, name in result.all()
    ]
