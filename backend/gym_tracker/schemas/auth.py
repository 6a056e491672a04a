"""Auth Schemas — signup, login and refresh payloads.

Invariants:
    - Emails are trimmed and lowercased BEFORE format validation
    - Signup passwords follow the length policy (core/password_policy.py)
    - Login only requires a non-empty password (policy changes never lock users out)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from gym_tracker.core.password_policy import validate_password_strength
from gym_tracker.schemas.common import UtcDatetime


def _normalize_email(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


class SignupRequest(BaseModel):
    email: EmailStr
    password: str

    normalize_email = field_validator("email", mode="before")(_normalize_email)

    @field_validator("password")
    @classmethod
    def enforce_policy(cls, v: str) -> str:
        check = validate_password_strength(v)
        if not check.valid:
            raise ValueError(check.feedback)
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    normalize_email = field_validator("email", mode="before")(_normalize_email)


class RefreshRequest(BaseModel):
    """Refresh payload — camelCase key kept for existing clients."""
    refresh_token: str = Field(alias="refreshToken", min_length=1)


class SessionTokens(BaseModel):
    access_token: str
    refresh_token: str
    expires_at: int


class UserSummary(BaseModel):
    id: UUID
    email: str
    created_at: UtcDatetime | None = None


class CurrentUserResponse(BaseModel):
    id: UUID
    email: str
    role: str


class AuthResponse(BaseModel):
    user: UserSummary
    session: SessionTokens
    password_strength: str | None = None

    @classmethod
    def build(
        cls, user_id: UUID, email: str, session: dict,
        created_at: datetime | None = None, password_strength: str | None = None,
    ) -> "AuthResponse":
        return cls(
            user=UserSummary(id=user_id, email=email, created_at=created_at),
            session=SessionTokens(**session),
            password_strength=password_strength,
        )
