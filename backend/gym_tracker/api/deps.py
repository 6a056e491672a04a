"""Route Dependencies — bearer authentication, path id parsing and the success envelope.

Invariants:
    - Missing header → 401 "Missing authorization token"
    - Anything other than "Bearer <a.b.c>" → 401 "Invalid authorization format"
    - Bad signature, expiry or revoked session → 401 "Invalid or expired token"
    - A path id that is not a UUID reads as a missing resource (404)
"""

import uuid
from typing import Annotated, Any

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from gym_tracker.core.errors import NotFoundError, UnauthorizedError
from gym_tracker.infrastructure.database import get_db
from gym_tracker.services.auth_service import AuthContext, resolve_access_token

DbSession = Annotated[AsyncSession, Depends(get_db)]


def extract_bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise UnauthorizedError("Missing authorization token")
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme != "Bearer" or not token or len(token.split(".")) != 3:
        raise UnauthorizedError("Invalid authorization format")
    return token


async def get_current_user(
    db: DbSession,
    authorization: Annotated[str | None, Header()] = None,
) -> AuthContext:
    token = extract_bearer_token(authorization)
    return await resolve_access_token(db, token)


CurrentUser = Annotated[AuthContext, Depends(get_current_user)]


def parse_resource_id(raw: str, resource_type: str) -> uuid.UUID:
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise NotFoundError(resource_type)


def success(data: Any) -> dict:
    return {"success": True, "data": data}
