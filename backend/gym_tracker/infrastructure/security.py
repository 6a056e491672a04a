"""Credentials — JWT access/refresh tokens (PyJWT) and password hashing (bcrypt).

Invariants:
    - Access and refresh tokens are HS256-signed JWTs with type, sub, sid, iat, exp
    - Refresh tokens also carry a jti; only the jti stored on the session is accepted
    - Token failures surface as TokenExpiredError / InvalidTokenError, never jwt.* exceptions
    - Plaintext passwords are never stored or logged

Design Decisions:
    - sid (auth session id) inside every token: logout revokes the session row,
      which invalidates outstanding access tokens without a deny-list
    - bcrypt work factor from settings so tests can run with a low cost
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt

from gym_tracker.config import get_settings

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenExpiredError(TokenError):
    """Token signature is valid but exp is in the past."""


class InvalidTokenError(TokenError):
    """Token is malformed, tampered with, or of the wrong type."""


@dataclass(frozen=True)
class IssuedTokens:
    access_token: str
    refresh_token: str
    refresh_jti: str
    expires_at: int  # unix seconds, access token expiry

    def as_session(self) -> dict:
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expires_at": self.expires_at,
        }


class TokenService:
    """Issues and verifies the JWTs that back an auth session."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(minutes=60),
        refresh_ttl: timedelta = timedelta(days=30),
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._access_ttl = access_ttl
        self._refresh_ttl = refresh_ttl

    def issue(self, user_id: str, email: str, session_id: str) -> IssuedTokens:
        """Create a fresh access/refresh pair for one session."""
        now = datetime.now(timezone.utc)
        access_exp = now + self._access_ttl
        refresh_jti = secrets.token_urlsafe(24)

        access_token = self._encode({
            "type": ACCESS_TOKEN_TYPE,
            "sub": user_id,
            "email": email,
            "sid": session_id,
            "iat": now,
            "exp": access_exp,
        })
        refresh_token = self._encode({
            "type": REFRESH_TOKEN_TYPE,
            "sub": user_id,
            "sid": session_id,
            "jti": refresh_jti,
            "iat": now,
            "exp": now + self._refresh_ttl,
        })
        return IssuedTokens(
            access_token=access_token,
            refresh_token=refresh_token,
            refresh_jti=refresh_jti,
            expires_at=int(access_exp.timestamp()),
        )

    def verify(self, token: str, expected_type: str) -> dict[str, Any]:
        """Decode and validate a token of the given type."""
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub", "sid", "type"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        if payload.get("type") != expected_type:
            raise InvalidTokenError(
                f"Expected token type '{expected_type}', got '{payload.get('type')}'"
            )
        return payload

    def _encode(self, payload: dict[str, Any]) -> str:
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password using bcrypt."""
    cost = rounds if rounds is not None else get_settings().bcrypt_rounds
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=cost))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Verify a password against a bcrypt hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(
            password.encode("utf-8"), hashed_password.encode("utf-8"),
        )
    except ValueError:
        return False


_token_service: TokenService | None = None


def get_token_service() -> TokenService:
    """Get or create the token service singleton from settings."""
    global _token_service
    if _token_service is None:
        settings = get_settings()
        _token_service = TokenService(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            access_ttl=timedelta(minutes=settings.access_token_expire_minutes),
            refresh_ttl=timedelta(days=settings.refresh_token_expire_days),
        )
    return _token_service
