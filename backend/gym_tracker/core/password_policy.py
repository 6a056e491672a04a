"""Password Policy — length-only password rules and strength feedback.

Invariants:
    - Valid passwords are PASSWORD_MIN_LENGTH..PASSWORD_MAX_LENGTH characters
    - No composition rules (digits, symbols, case) are ever required
    - Both functions are pure: no IO, no hashing

Design Decisions:
    - Length over complexity, following current NIST guidance
    - Upper bound of 64 keeps the input well under bcrypt's 72-byte limit for ASCII
"""

from dataclasses import dataclass

PASSWORD_MIN_LENGTH: int = 8
PASSWORD_MAX_LENGTH: int = 64


@dataclass(frozen=True)
class PasswordCheck:
    valid: bool
    feedback: str | None = None


def validate_password_strength(password: str) -> PasswordCheck:
    """Check a password against the length policy."""
    if not password:
        return PasswordCheck(False, "Password is required")
    if len(password) < PASSWORD_MIN_LENGTH:
        return PasswordCheck(
            False,
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
        )
    if len(password) > PASSWORD_MAX_LENGTH:
        return PasswordCheck(
            False,
            f"Password must not exceed {PASSWORD_MAX_LENGTH} characters",
        )
    return PasswordCheck(True)


def password_strength_feedback(password: str) -> str:
    """User-facing hint that nudges towards longer passwords."""
    length = len(password)
    if length < PASSWORD_MIN_LENGTH:
        missing = PASSWORD_MIN_LENGTH - length
        plural = "" if missing == 1 else "s"
        return f"Too short. Add {missing} more character{plural}."
    if length < 12:
        return "Acceptable. Consider using a longer password for better security."
    if length < 16:
        return "Good. Your password is reasonably secure."
    return "Excellent! Your password is very secure."
