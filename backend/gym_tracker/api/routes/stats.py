"""Stats Routes — personal records, progress, volume and dashboard summary."""

from typing import Annotated

from fastapi import APIRouter, Query

from gym_tracker.api.deps import CurrentUser, DbSession, parse_resource_id, success
from gym_tracker.core.domain_types import StatsPeriod, VolumeGrouping
from gym_tracker.services import personal_record_service, stats_service

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/prs")
async def personal_records(user: CurrentUser, db: DbSession):
    return success(await stats_service.personal_records(db, user.user_id))


@router.get("/progress/{exercise_id}")
async def exercise_progress(
    exercise_id: str,
    user: CurrentUser,
    db: DbSession,
    period: StatsPeriod = StatsPeriod.TWELVE_WEEKS,
):
    return success(await stats_service.exercise_progress(
        db, user.user_id, parse_resource_id(exercise_id, "Exercise"), period,
    ))


@router.get("/volume")
async def volume(
    user: CurrentUser,
    db: DbSession,
    group_by: Annotated[VolumeGrouping, Query(alias="groupBy")] = VolumeGrouping.WEEK,
    period: StatsPeriod = StatsPeriod.TWELVE_WEEKS,
):
    return success(await stats_service.volume(db, user.user_id, group_by, period))


@router.get("/summary")
async def summary(user: CurrentUser, db: DbSession):
    return success(await stats_service.summary(db, user.user_id))


@router.get("/records")
async def stored_records(user: CurrentUser, db: DbSession):
    return success(await personal_record_service.list_records(db, user.user_id))
