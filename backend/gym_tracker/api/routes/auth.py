"""Auth Routes — signup, login, logout, current user and token refresh."""

from fastapi import APIRouter, status

from gym_tracker.api.deps import CurrentUser, DbSession, success
from gym_tracker.schemas.auth import (
    CurrentUserResponse, LoginRequest, RefreshRequest, SignupRequest,
)
from gym_tracker.schemas.common import MessageResponse
from gym_tracker.services import auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(body: SignupRequest, db: DbSession):
    result = await auth_service.signup(db, body.email, body.password)
    return success(result)


@router.post("/login")
async def login(body: LoginRequest, db: DbSession):
    result = await auth_service.login(db, body.email, body.password)
    return success(result.model_dump(
        exclude={"password_strength": True, "user": {"created_at"}},
    ))


@router.post("/logout")
async def logout(user: CurrentUser, db: DbSession):
    await auth_service.logout(db, user)
    return success(MessageResponse(message="Successfully logged out"))


@router.get("/me")
async def me(user: CurrentUser):
    return success(CurrentUserResponse(
        id=user.user_id, email=user.email, role=user.role,
    ))


@router.post("/refresh")
async def refresh(body: RefreshRequest, db: DbSession):
    return success(await auth_service.refresh(db, body.refresh_token))
