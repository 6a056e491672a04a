"""Auth Service — signup, login, logout and refresh-token rotation over persisted sessions.

Invariants:
    - Signup creates the user, its profile and its first session in ONE transaction
    - Login failures never reveal whether the email exists
    - A session is usable while revoked_at is NULL; logout is idempotent
    - Refresh accepts only the session's current refresh jti, then rotates it

Design Decisions:
    - bcrypt runs in a worker thread: hashing is CPU-bound and would stall the event loop
    - Integrity races on the unique email surface as the same 409 as the pre-check
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from gym_tracker.core.clock import utcnow
from gym_tracker.core.errors import ConflictError, UnauthorizedError
from gym_tracker.core.password_policy import password_strength_feedback
from gym_tracker.infrastructure.security import (
    ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE, TokenError, get_token_service,
    hash_password, verify_password,
)
from gym_tracker.models import AuthSession, Profile, User
from gym_tracker.schemas.auth import AuthResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
INVALID_REFRESH = "Invalid or expired refresh token"


@dataclass(frozen=True)
class AuthContext:
    """The caller behind a verified access token."""
    user_id: uuid.UUID
    email: str
    role: str
    session_id: uuid.UUID


async def signup(db: AsyncSession, email: str, password: str) -> AuthResponse:
    existing = await db.scalar(select(User.id).where(User.email == email))
    if existing is not None:
        raise ConflictError("Email already registered")

    password_hash = await asyncio.to_thread(hash_password, password)
    user = User(id=uuid.uuid4(), email=email, password_hash=password_hash)
    db.add(user)
    await db.flush()
    db.add(Profile(id=user.id, email=email))
    session = _open_session(db, user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Email already registered")

    logger.info("User signed up", extra={"user_id": str(user.id)})
    return AuthResponse.build(
        user.id, user.email, session,
        created_at=user.created_at,
        password_strength=password_strength_feedback(password),
    )


async def login(db: AsyncSession, email: str, password: str) -> AuthResponse:
    user = await db.scalar(select(User).where(User.email == email))
    if user is None:
        raise UnauthorizedError(INVALID_CREDENTIALS)
    if not await asyncio.to_thread(verify_password, password, user.password_hash):
        logger.info("Login rejected", extra={"user_id": str(user.id)})
        raise UnauthorizedError(INVALID_CREDENTIALS)

    session = _open_session(db, user)
    await db.commit()
    logger.info("User logged in", extra={"user_id": str(user.id)})
    return AuthResponse.build(user.id, user.email, session)


async def logout(db: AsyncSession, auth: AuthContext) -> None:
    row = await db.get(AuthSession, auth.session_id)
    if row is not None and row.revoked_at is None:
        row.revoked_at = utcnow()
        await db.commit()
    logger.info("User logged out", extra={"user_id": str(auth.user_id)})


async def refresh(db: AsyncSession, refresh_token: str) -> dict:
    """Exchange a refresh token for a new token pair; the old refresh token dies."""
    try:
        payload = get_token_service().verify(refresh_token, REFRESH_TOKEN_TYPE)
        session_id = uuid.UUID(payload["sid"])
        user_id = uuid.UUID(payload["sub"])
    except (TokenError, ValueError, KeyError):
        raise UnauthorizedError(INVALID_REFRESH)

    row = await db.get(AuthSession, session_id)
    if (
        row is None
        or row.revoked_at is not None
        or row.user_id != user_id
        or row.refresh_jti != payload.get("jti")
    ):
        raise UnauthorizedError(INVALID_REFRESH)

    user = await db.get(User, user_id)
    if user is None:
        raise UnauthorizedError(INVALID_REFRESH)

    tokens = get_token_service().issue(str(user.id), user.email, str(row.id))
    row.refresh_jti = tokens.refresh_jti
    row.last_refreshed_at = utcnow()
    await db.commit()
    return {"session": tokens.as_session()}


async def resolve_access_token(db: AsyncSession, token: str) -> AuthContext:
    """Verify an access token and the session behind it."""
    try:
        payload = get_token_service().verify(token, ACCESS_TOKEN_TYPE)
        session_id = uuid.UUID(payload["sid"])
        user_id = uuid.UUID(payload["sub"])
    except (TokenError, ValueError, KeyError):
        raise UnauthorizedError("Invalid or expired token")

    row = await db.get(AuthSession, session_id)
    if row is None or row.revoked_at is not None or row.user_id != user_id:
        raise UnauthorizedError("Invalid or expired token")
    user = await db.get(User, user_id)
    if user is None:
        raise UnauthorizedError("Invalid or expired token")
    return AuthContext(
        user_id=user.id, email=user.email, role=user.role, session_id=row.id,
    )


def _open_session(db: AsyncSession, user: User) -> dict:
    """Stage a new auth session for the user and return its tokens."""
    session_id = uuid.uuid4()
    tokens = get_token_service().issue(str(user.id), user.email, str(session_id))
    db.add(AuthSession(
        id=session_id, user_id=user.id, refresh_jti=tokens.refresh_jti,
    ))
    return tokens.as_session()
