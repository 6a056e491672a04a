"""Stats Service — fetch the caller's sets once, hand them to the pure reductions.

Invariants:
    - Every query joins through workouts and filters on workouts.user_id
    - Period bounds apply to workouts.started_at
    - No statistic is stored; everything is recomputed per request
"""

import uuid
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gym_tracker.core.clock import utcnow
from gym_tracker.core.domain_types import StatsPeriod, VolumeGrouping
from gym_tracker.core.training_stats import (
    SetSample, compute_personal_records, compute_progress, compute_summary,
    compute_volume, period_start,
)
from gym_tracker.models import Exercise, ExerciseSet, Workout, WorkoutExercise
from gym_tracker.services.exercise_service import get_exercise


async def personal_records(db: AsyncSession, user_id: uuid.UUID) -> list[dict]:
    samples, names = await _load_samples(db, user_id)
    return compute_personal_records(samples, names)


async def exercise_progress(
    db: AsyncSession, user_id: uuid.UUID, exercise_id: uuid.UUID,
    period: StatsPeriod = StatsPeriod.TWELVE_WEEKS, now: datetime | None = None,
) -> list[dict]:
    await get_exercise(db, user_id, exercise_id)
    since = period_start(period, now or utcnow())
    samples, _ = await _load_samples(db, user_id, since=since, exercise_id=exercise_id)
    return compute_progress(samples)


async def volume(
    db: AsyncSession, user_id: uuid.UUID,
    grouping: VolumeGrouping = VolumeGrouping.WEEK,
    period: StatsPeriod = StatsPeriod.TWELVE_WEEKS, now: datetime | None = None,
) -> list[dict]:
    since = period_start(period, now or utcnow())
    samples, _ = await _load_samples(db, user_id, since=since)
    return compute_volume(samples, grouping)


async def summary(
    db: AsyncSession, user_id: uuid.UUID, now: datetime | None = None,
) -> dict:
    workout_times = list(await db.scalars(
        select(Workout.started_at).where(Workout.user_id == user_id)
    ))
    total_exercises = await db.scalar(
        select(func.count(Exercise.id)).where(Exercise.user_id == user_id)
    )
    samples, _ = await _load_samples(db, user_id)
    return compute_summary(workout_times, samples, total_exercises or 0, now or utcnow())


async def _load_samples(
    db: AsyncSession,
    user_id: uuid.UUID,
    since: datetime | None = None,
    exercise_id: uuid.UUID | None = None,
) -> tuple[list[SetSample], dict[uuid.UUID, str]]:
    """All of the user's sets joined with workout time and exercise, plus exercise names."""
    query = (
        select(
            WorkoutExercise.exercise_id,
            Workout.id,
            Workout.started_at,
            ExerciseSet.weight_kg,
            ExerciseSet.reps,
            Exercise.name,
            Exercise.muscle_groups,
        )
        .join(WorkoutExercise, WorkoutExercise.id == ExerciseSet.workout_exercise_id)
        .join(Workout, Workout.id == WorkoutExercise.workout_id)
        .join(Exercise, Exercise.id == WorkoutExercise.exercise_id)
        .where(Workout.user_id == user_id)
        .order_by(Workout.started_at, ExerciseSet.set_number)
    )
    if since is not None:
        query = query.where(Workout.started_at >= since)
    if exercise_id is not None:
        query = query.where(WorkoutExercise.exercise_id == exercise_id)

    samples: list[SetSample] = []
    names: dict[uuid.UUID, str] = {}
    for ex_id, workout_id, started_at, weight, reps, name, groups in (
        await db.execute(query)
    ).all():
        names[ex_id] = name
        samples.append(SetSample(
            exercise_id=ex_id,
            workout_id=workout_id,
            started_at=started_at,
            weight_kg=weight,
            reps=reps,
            muscle_group=groups[0] if groups else None,
        ))
    return samples, names
