"""Exercise Service — the caller's exercise library.

Invariants:
    - Names are unique per user (checked before write, enforced by the DB)
    - Missing exercise → 404 "Exercise not found"; someone else's → 403
    - An exercise referenced by a workout or a personal record cannot be deleted

Design Decisions:
    - muscle_group / equipment_type filters applied in Python over the user's rows:
      list membership on JSON columns has no portable SQL form, and libraries are small
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gym_tracker.core.domain_types import ExerciseSort
from gym_tracker.core.errors import ConflictError, ForbiddenError, NotFoundError
from gym_tracker.models import Exercise, PersonalRecord, WorkoutExercise
from gym_tracker.schemas.exercise import ExerciseCreate, ExerciseUpdate

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "An exercise with this name already exists"
IN_USE = "Cannot delete exercise that is being used in workouts or routines"

_SORT_ORDER = {
    ExerciseSort.NAME_ASC: Exercise.name.asc(),
    ExerciseSort.NAME_DESC: Exercise.name.desc(),
    ExerciseSort.CREATED_ASC: Exercise.created_at.asc(),
    ExerciseSort.CREATED_DESC: Exercise.created_at.desc(),
}


async def list_exercises(
    db: AsyncSession,
    user_id: uuid.UUID,
    muscle_group: str | None = None,
    equipment_type: str | None = None,
    sort: ExerciseSort = ExerciseSort.CREATED_DESC,
) -> list[Exercise]:
    result = await db.scalars(
        select(Exercise)
        .where(Exercise.user_id == user_id)
        .order_by(_SORT_ORDER[sort], Exercise.id)
    )
    exercises = list(result)
    if muscle_group:
        exercises = [e for e in exercises if muscle_group in (e.muscle_groups or [])]
    if equipment_type:
        exercises = [
            e for e in exercises if equipment_type in (e.equipment_required or [])
        ]
    return exercises


async def get_exercise(
    db: AsyncSession, user_id: uuid.UUID, exercise_id: uuid.UUID,
    action: str = "view",
) -> Exercise:
    """Load an exercise the caller owns; someone else's is 403 for every action."""
    exercise = await db.get(Exercise, exercise_id)
    if exercise is None:
        raise NotFoundError("Exercise")
    if exercise.user_id != user_id:
        raise ForbiddenError(
            f"Forbidden: You do not have permission to {action} this exercise"
        )
    return exercise


async def create_exercise(
    db: AsyncSession, user_id: uuid.UUID, payload: ExerciseCreate,
) -> Exercise:
    await _ensure_name_free(db, user_id, payload.name)
    exercise = Exercise(
        user_id=user_id,
        name=payload.name,
        description=payload.description,
        category=payload.category,
        muscle_groups=[payload.muscle_group],
        equipment_required=[payload.equipment_type],
        is_public=False,
    )
    db.add(exercise)
    await _commit_unique(db)
    logger.info(
        f"Exercise created: {exercise.name}",
        extra={"user_id": str(user_id)},
    )
    return exercise


async def update_exercise(
    db: AsyncSession, user_id: uuid.UUID, exercise_id: uuid.UUID,
    payload: ExerciseUpdate,
) -> Exercise:
    exercise = await get_exercise(db, user_id, exercise_id, action="update")
    changes = payload.model_dump(exclude_unset=True)

    name = changes.get("name")
    if name is not None and name != exercise.name:
        await _ensure_name_free(db, user_id, name, exclude_id=exercise.id)
        exercise.name = name
    if "description" in changes:
        exercise.description = changes["description"]
    if changes.get("category") is not None:
        exercise.category = changes["category"]
    if changes.get("muscle_group") is not None:
        exercise.muscle_groups = [changes["muscle_group"]]
    if changes.get("equipment_type") is not None:
        exercise.equipment_required = [changes["equipment_type"]]

    await _commit_unique(db)
    await db.refresh(exercise)
    return exercise


async def delete_exercise(
    db: AsyncSession, user_id: uuid.UUID, exercise_id: uuid.UUID,
) -> None:
    exercise = await get_exercise(db, user_id, exercise_id, action="delete")
    in_workouts = await db.scalar(
        select(WorkoutExercise.id)
        .where(WorkoutExercise.exercise_id == exercise.id)
        .limit(1)
    )
    in_records = await db.scalar(
        select(PersonalRecord.id)
        .where(PersonalRecord.exercise_id == exercise.id)
        .limit(1)
    )
    if in_workouts is not None or in_records is not None:
        raise ConflictError(IN_USE)
    await db.delete(exercise)
    await db.commit()
    logger.info(
        f"Exercise deleted: {exercise_id}", extra={"user_id": str(user_id)},
    )


async def _ensure_name_free(
    db: AsyncSession, user_id: uuid.UUID, name: str,
    exclude_id: uuid.UUID | None = None,
) -> None:
    query = select(Exercise.id).where(
        Exercise.user_id == user_id, Exercise.name == name,
    )
    if exclude_id is not None:
        query = query.where(Exercise.id != exclude_id)
    if await db.scalar(query.limit(1)) is not None:
        raise ConflictError(DUPLICATE_NAME)


async def _commit_unique(db: AsyncSession) -> None:
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(DUPLICATE_NAME)
