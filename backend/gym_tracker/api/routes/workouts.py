"""Workout Routes — log workouts as flat set lists, browse, edit and delete them."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Query, status

from gym_tracker.api.deps import CurrentUser, DbSession, parse_resource_id, success
from gym_tracker.schemas.common import MessageResponse
from gym_tracker.schemas.workout import WorkoutCreate, WorkoutUpdate
from gym_tracker.services import workout_service

router = APIRouter(prefix="/api/workouts", tags=["workouts"])


@router.get("")
async def list_workouts(
    user: CurrentUser,
    db: DbSession,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    workouts = await workout_service.list_workouts(
        db, user.user_id,
        start_date=start_date, end_date=end_date, limit=limit, offset=offset,
    )
    return success(workouts)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_workout(body: WorkoutCreate, user: CurrentUser, db: DbSession):
    return success(await workout_service.create_workout(db, user.user_id, body))


@router.get("/{workout_id}")
async def get_workout(workout_id: str, user: CurrentUser, db: DbSession):
    return success(await workout_service.get_workout(
        db, user.user_id, parse_resource_id(workout_id, "Workout"),
    ))


@router.patch("/{workout_id}")
async def update_workout(
    workout_id: str, body: WorkoutUpdate, user: CurrentUser, db: DbSession,
):
    return success(await workout_service.update_workout(
        db, user.user_id, parse_resource_id(workout_id, "Workout"), body,
    ))


@router.delete("/{workout_id}")
async def delete_workout(workout_id: str, user: CurrentUser, db: DbSession):
    await workout_service.delete_workout(
        db, user.user_id, parse_resource_id(workout_id, "Workout"),
    )
    return success(MessageResponse(message="Workout deleted successfully"))
