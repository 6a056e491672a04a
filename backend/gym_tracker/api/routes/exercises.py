"""Exercise Routes — list, read, create, update and delete the caller's exercises."""

from fastapi import APIRouter, status

from gym_tracker.api.deps import CurrentUser, DbSession, parse_resource_id, success
from gym_tracker.core.domain_types import EquipmentType, ExerciseSort, MuscleGroup
from gym_tracker.schemas.common import MessageResponse
from gym_tracker.schemas.exercise import (
    ExerciseCreate, ExerciseResponse, ExerciseUpdate,
)
from gym_tracker.services import exercise_service

router = APIRouter(prefix="/api/exercises", tags=["exercises"])


@router.get("")
async def list_exercises(
    user: CurrentUser,
    db: DbSession,
    muscle_group: MuscleGroup | None = None,
    equipment_type: EquipmentType | None = None,
    sort: ExerciseSort = ExerciseSort.CREATED_DESC,
):
    exercises = await exercise_service.list_exercises(
        db, user.user_id,
        muscle_group=muscle_group.value if muscle_group else None,
        equipment_type=equipment_type.value if equipment_type else None,
        sort=sort,
    )
    return success([ExerciseResponse.from_model(e) for e in exercises])


@router.get("/{exercise_id}")
async def get_exercise(exercise_id: str, user: CurrentUser, db: DbSession):
    exercise = await exercise_service.get_exercise(
        db, user.user_id, parse_resource_id(exercise_id, "Exercise"),
    )
    return success(ExerciseResponse.from_model(exercise))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_exercise(body: ExerciseCreate, user: CurrentUser, db: DbSession):
    exercise = await exercise_service.create_exercise(db, user.user_id, body)
    return success(ExerciseResponse.from_model(exercise))


@router.put("/{exercise_id}")
async def update_exercise(
    exercise_id: str, body: ExerciseUpdate, user: CurrentUser, db: DbSession,
):
    exercise = await exercise_service.update_exercise(
        db, user.user_id, parse_resource_id(exercise_id, "Exercise"), body,
    )
    return success(ExerciseResponse.from_model(exercise))


@router.delete("/{exercise_id}")
async def delete_exercise(exercise_id: str, user: CurrentUser, db: DbSession):
    await exercise_service.delete_exercise(
        db, user.user_id, parse_resource_id(exercise_id, "Exercise"),
    )
    return success(MessageResponse(message="Exercise deleted successfully"))
