"""Profile Routes — the caller's own profile."""

from fastapi import APIRouter

from gym_tracker.api.deps import CurrentUser, DbSession, success
from gym_tracker.schemas.profile import ProfileResponse, ProfileUpdate
from gym_tracker.services import profile_service

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("")
async def get_profile(user: CurrentUser, db: DbSession):
    profile = await profile_service.get_profile(db, user.user_id)
    return success(ProfileResponse.model_validate(profile))


@router.put("")
async def update_profile(body: ProfileUpdate, user: CurrentUser, db: DbSession):
    profile = await profile_service.update_profile(db, user.user_id, body)
    return success(ProfileResponse.model_validate(profile))
