"""Workout Service — log, list, read, edit and delete the caller's workouts.

Invariants:
    - Creating a workout is ONE transaction: workout, workout_exercises, sets and
      personal-record updates commit together or not at all
    - Referenced exercises must all exist (400) and all belong to the caller (403)
    - Sets are read back ordered by set_number, each tagged with its exercise_id
    - Deleting a workout removes its workout_exercises and sets; records that
      pointed at those sets keep their value and lose the set link

Design Decisions:
    - Explicit child deletes instead of relying on FK cascades: same behaviour on
      PostgreSQL and SQLite (which ignores FKs unless told otherwise)
    - Set/exercise counts for the list view come from one grouped query
"""

import logging
import uuid
from datetime import datetime

from sqlalchemy import delete, distinct, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from gym_tracker.core.clock import ensure_utc
from gym_tracker.core.errors import ForbiddenError, NotFoundError, ValidationError
from gym_tracker.core.workout_layout import (
    default_workout_name, derived_duration_minutes, group_sets_by_exercise,
)
from gym_tracker.models import (
    Exercise, ExerciseSet, PersonalRecord, Workout, WorkoutExercise,
)
from gym_tracker.schemas.workout import (
    SetResponse, WorkoutCreate, WorkoutDetailResponse, WorkoutResponse,
    WorkoutSummaryResponse, WorkoutUpdate,
)
from gym_tracker.services import personal_record_service

logger = logging.getLogger(__name__)


async def list_workouts(
    db: AsyncSession,
    user_id: uuid.UUID,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    limit: int = 50,
    offset: int = 0,
) -> list[WorkoutSummaryResponse]:
    query = select(Workout).where(Workout.user_id == user_id)
    if start_date is not None:
        query = query.where(Workout.started_at >= ensure_utc(start_date))
    if end_date is not None:
        query = query.where(Workout.started_at <= ensure_utc(end_date))
    query = (
        query.order_by(Workout.started_at.desc(), Workout.id)
        .limit(limit)
        .offset(offset)
    )
    workouts = list(await db.scalars(query))
    counts = await _count_children([w.id for w in workouts], db)
    return [
        WorkoutSummaryResponse(
            **WorkoutResponse.model_validate(w).model_dump(),
            total_sets=counts.get(w.id, (0, 0))[0],
            exercises_count=counts.get(w.id, (0, 0))[1],
        )
        for w in workouts
    ]


async def create_workout(
    db: AsyncSession, user_id: uuid.UUID, payload: WorkoutCreate,
) -> WorkoutDetailResponse:
    await _check_exercises_usable(db, user_id, {s.exercise_id for s in payload.sets})

    workout = Workout(
        id=uuid.uuid4(),
        user_id=user_id,
        name=default_workout_name(payload.workout_date),
        notes=payload.notes,
        started_at=payload.workout_date,
        completed_at=payload.workout_date,
        duration_minutes=payload.duration_minutes,
    )
    db.add(workout)
    await db.flush()

    logged: list[tuple[ExerciseSet, uuid.UUID]] = []
    for order, (exercise_id, sets) in enumerate(
        group_sets_by_exercise(payload.sets), start=1,
    ):
        link = WorkoutExercise(
            id=uuid.uuid4(),
            workout_id=workout.id,
            exercise_id=exercise_id,
            order_in_workout=order,
        )
        db.add(link)
        await db.flush()
        rows = [
            ExerciseSet(
                id=uuid.uuid4(),
                workout_exercise_id=link.id,
                set_number=s.set_number,
                weight_kg=s.weight_kg,
                reps=s.reps,
            )
            for s in sets
        ]
        db.add_all(rows)
        await db.flush()
        await personal_record_service.apply_new_sets(db, user_id, exercise_id, rows)
        logged.extend((row, exercise_id) for row in rows)

    await db.commit()
    logger.info(
        f"Workout logged with {len(logged)} sets",
        extra={"user_id": str(user_id)},
    )
    return _detail(workout, logged)


async def get_workout(
    db: AsyncSession, user_id: uuid.UUID, workout_id: uuid.UUID,
) -> WorkoutDetailResponse:
    workout = await _get_owned_workout(db, user_id, workout_id, "view")
    result = await db.execute(
        select(ExerciseSet, WorkoutExercise.exercise_id)
        .join(WorkoutExercise, WorkoutExercise.id == ExerciseSet.workout_exercise_id)
        .where(WorkoutExercise.workout_id == workout.id)
        .order_by(ExerciseSet.set_number, WorkoutExercise.order_in_workout)
    )
    return _detail(workout, [(row, exercise_id) for row, exercise_id in result.all()])


async def update_workout(
    db: AsyncSession, user_id: uuid.UUID, workout_id: uuid.UUID,
    payload: WorkoutUpdate,
) -> WorkoutResponse:
    workout = await _get_owned_workout(db, user_id, workout_id, "update")
    changes = payload.model_dump(exclude_unset=True)
    previously_completed = workout.completed_at is not None

    if changes.get("name") is not None:
        workout.name = changes["name"]
    for field in ("notes", "duration_minutes", "calories_burned"):
        if field in changes:
            setattr(workout, field, changes[field])
    if "completed_at" in changes:
        completed_at = changes["completed_at"]
        if completed_at is not None and completed_at < ensure_utc(workout.started_at):
            raise ValidationError(
                "completed_at must not be before started_at", field="completed_at",
            )
        workout.completed_at = completed_at

    if (
        workout.completed_at is not None
        and not previously_completed
        and workout.duration_minutes is None
    ):
        workout.duration_minutes = derived_duration_minutes(
            workout.started_at, workout.completed_at,
        )

    await db.commit()
    await db.refresh(workout)
    return WorkoutResponse.model_validate(workout)


async def delete_workout(
    db: AsyncSession, user_id: uuid.UUID, workout_id: uuid.UUID,
) -> None:
    workout = await _get_owned_workout(db, user_id, workout_id, "delete")
    link_ids = select(WorkoutExercise.id).where(
        WorkoutExercise.workout_id == workout.id,
    )
    set_ids = select(ExerciseSet.id).where(
        ExerciseSet.workout_exercise_id.in_(link_ids),
    )
    await db.execute(
        update(PersonalRecord)
        .where(PersonalRecord.set_id.in_(set_ids))
        .values(set_id=None)
        .execution_options(synchronize_session=False)
    )
    await db.execute(
        delete(ExerciseSet)
        .where(ExerciseSet.workout_exercise_id.in_(link_ids))
        .execution_options(synchronize_session=False)
    )
    await db.execute(
        delete(WorkoutExercise)
        .where(WorkoutExercise.workout_id == workout.id)
        .execution_options(synchronize_session=False)
    )
    await db.delete(workout)
    await db.commit()
    logger.info(f"Workout deleted: {workout_id}", extra={"user_id": str(user_id)})


async def _get_owned_workout(
    db: AsyncSession, user_id: uuid.UUID, workout_id: uuid.UUID, action: str,
) -> Workout:
    workout = await db.get(Workout, workout_id)
    if workout is None:
        raise NotFoundError("Workout")
    if workout.user_id != user_id:
        raise ForbiddenError(
            f"Forbidden: You do not have permission to {action} this workout"
        )
    return workout


async def _check_exercises_usable(
    db: AsyncSession, user_id: uuid.UUID, exercise_ids: set[uuid.UUID],
) -> None:
    result = await db.execute(
        select(Exercise.id, Exercise.user_id).where(Exercise.id.in_(exercise_ids))
    )
    owners = {row.id: row.user_id for row in result.all()}
    if len(owners) != len(exercise_ids):
        raise ValidationError("One or more exercises do not exist")
    if any(owner != user_id for owner in owners.values()):
        raise ForbiddenError(
            "Forbidden: You do not have permission to use these exercises"
        )


async def _count_children(
    workout_ids: list[uuid.UUID], db: AsyncSession,
) -> dict[uuid.UUID, tuple[int, int]]:
    """workout_id → (total sets, distinct exercises)."""
    if not workout_ids:
        return {}
    result = await db.execute(
        select(
            WorkoutExercise.workout_id,
            func.count(ExerciseSet.id),
            func.count(distinct(WorkoutExercise.exercise_id)),
        )
        .outerjoin(ExerciseSet, ExerciseSet.workout_exercise_id == WorkoutExercise.id)
        .where(WorkoutExercise.workout_id.in_(workout_ids))
        .group_by(WorkoutExercise.workout_id)
    )
    return {row[0]: (row[1], row[2]) for row in result.all()}


def _detail(
    workout: Workout, sets: list[tuple[ExerciseSet, uuid.UUID]],
) -> WorkoutDetailResponse:
    return WorkoutDetailResponse(
        **WorkoutResponse.model_validate(workout).model_dump(),
        sets=[
            SetResponse(
                id=row.id,
                workout_exercise_id=row.workout_exercise_id,
                exercise_id=exercise_id,
                set_number=row.set_number,
                reps=row.reps,
                weight_kg=row.weight_kg,
                duration_seconds=row.duration_seconds,
                distance_meters=row.distance_meters,
                rpe=row.rpe,
                notes=row.notes,
                created_at=row.created_at,
            )
            for row, exercise_id in sets
        ],
    )
