"""Profile Service — read and partially update the caller's profile."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from gym_tracker.core.errors import NotFoundError
from gym_tracker.models import Profile
from gym_tracker.schemas.profile import ProfileUpdate


async def get_profile(db: AsyncSession, user_id: uuid.UUID) -> Profile:
    profile = await db.get(Profile, user_id)
    if profile is None:
        raise NotFoundError("Profile")
    return profile


async def update_profile(
    db: AsyncSession, user_id: uuid.UUID, payload: ProfileUpdate,
) -> Profile:
    profile = await get_profile(db, user_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(profile, field, value)
    await db.commit()
    await db.refresh(profile)
    return profile
