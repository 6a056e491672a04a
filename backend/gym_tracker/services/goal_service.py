"""Goal Service — CRUD over the caller's goals.

Invariants:
    - target_date is never before start_date after an update is applied
    - completed_at is stamped when status becomes "completed" and cleared when it leaves
"""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gym_tracker.core.clock import utcnow
from gym_tracker.core.domain_types import GoalStatus
from gym_tracker.core.errors import ForbiddenError, NotFoundError, ValidationError
from gym_tracker.models import Goal
from gym_tracker.schemas.goal import GoalCreate, GoalUpdate

logger = logging.getLogger(__name__)


async def list_goals(
    db: AsyncSession, user_id: uuid.UUID, status: GoalStatus | None = None,
) -> list[Goal]:
    query = select(Goal).where(Goal.user_id == user_id)
    if status is not None:
        query = query.where(Goal.status == status.value)
    query = query.order_by(Goal.created_at.desc(), Goal.id)
    return list(await db.scalars(query))


async def get_goal(
    db: AsyncSession, user_id: uuid.UUID, goal_id: uuid.UUID, action: str = "view",
) -> Goal:
    goal = await db.get(Goal, goal_id)
    if goal is None:
        raise NotFoundError("Goal")
    if goal.user_id != user_id:
        raise ForbiddenError(
            f"Forbidden: You do not have permission to {action} this goal"
        )
    return goal


async def create_goal(
    db: AsyncSession, user_id: uuid.UUID, payload: GoalCreate,
) -> Goal:
    goal = Goal(user_id=user_id, **payload.model_dump())
    if goal.status == GoalStatus.COMPLETED.value:
        goal.completed_at = utcnow()
    db.add(goal)
    await db.commit()
    logger.info(f"Goal created: {goal.title}", extra={"user_id": str(user_id)})
    return goal


async def update_goal(
    db: AsyncSession, user_id: uuid.UUID, goal_id: uuid.UUID, payload: GoalUpdate,
) -> Goal:
    goal = await get_goal(db, user_id, goal_id, action="update")
    changes = payload.model_dump(exclude_unset=True)
    previous_status = goal.status

    for field in ("title", "goal_type", "start_date", "status"):
        if changes.get(field) is not None:
            setattr(goal, field, changes.pop(field))
        else:
            changes.pop(field, None)
    for field, value in changes.items():
        setattr(goal, field, value)

    if goal.target_date is not None and goal.target_date < goal.start_date:
        raise ValidationError(
            "target_date must not be before start_date", field="target_date",
        )
    if goal.status != previous_status:
        completed = goal.status == GoalStatus.COMPLETED.value
        goal.completed_at = utcnow() if completed else None

    await db.commit()
    await db.refresh(goal)
    return goal


async def delete_goal(
    db: AsyncSession, user_id: uuid.UUID, goal_id: uuid.UUID,
) -> None:
    goal = await get_goal(db, user_id, goal_id, action="delete")
    await db.delete(goal)
    await db.commit()
