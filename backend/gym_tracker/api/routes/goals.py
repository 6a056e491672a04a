"""Goal Routes — CRUD over the caller's goals."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from gym_tracker.api.deps import CurrentUser, DbSession, parse_resource_id, success
from gym_tracker.core.domain_types import GoalStatus
from gym_tracker.schemas.common import MessageResponse
from gym_tracker.schemas.goal import GoalCreate, GoalResponse, GoalUpdate
from gym_tracker.services import goal_service

router = APIRouter(prefix="/api/goals", tags=["goals"])


@router.get("")
async def list_goals(
    user: CurrentUser,
    db: DbSession,
    goal_status: Annotated[GoalStatus | None, Query(alias="status")] = None,
):
    goals = await goal_service.list_goals(db, user.user_id, goal_status)
    return success([GoalResponse.model_validate(g) for g in goals])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_goal(body: GoalCreate, user: CurrentUser, db: DbSession):
    goal = await goal_service.create_goal(db, user.user_id, body)
    return success(GoalResponse.model_validate(goal))


@router.get("/{goal_id}")
async def get_goal(goal_id: str, user: CurrentUser, db: DbSession):
    goal = await goal_service.get_goal(
        db, user.user_id, parse_resource_id(goal_id, "Goal"),
    )
    return success(GoalResponse.model_validate(goal))


@router.put("/{goal_id}")
async def update_goal(
    goal_id: str, body: GoalUpdate, user: CurrentUser, db: DbSession,
):
    goal = await goal_service.update_goal(
        db, user.user_id, parse_resource_id(goal_id, "Goal"), body,
    )
    return success(GoalResponse.model_validate(goal))


@router.delete("/{goal_id}")
async def delete_goal(goal_id: str, user: CurrentUser, db: DbSession):
    await goal_service.delete_goal(
        db, user.user_id, parse_resource_id(goal_id, "Goal"),
    )
    return success(MessageResponse(message="Goal deleted successfully"))
