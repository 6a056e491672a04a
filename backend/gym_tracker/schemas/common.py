"""Shared schema building blocks."""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel

from gym_tracker.core.clock import ensure_utc

# Datetime normalized to aware UTC on the way in and out
UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


def strip_or_none(value: str | None) -> str | None:
    """Trim surrounding whitespace; blank strings become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class MessageResponse(BaseModel):
    message: str
