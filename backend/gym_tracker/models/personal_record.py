"""PersonalRecord ORM — best value per (user, exercise, record type).

Invariants:
    - (user_id, exercise_id, record_type) is unique: records are upserted, never duplicated
    - value > 0
    - set_id points at the set that achieved the record, NULL once that set is deleted
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, DateTime, ForeignKey, Numeric, String, Text,
    UniqueConstraint, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from gym_tracker.db.base import Base


class PersonalRecord(Base):
    __tablename__ = "personal_records"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "exercise_id", "record_type", name="user_exercise_record_unique",
        ),
        CheckConstraint("value > 0", name="personal_record_value_check"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("exercises.id", ondelete="RESTRICT"), nullable=False, index=True,
    )
    record_type: Mapped[str] = mapped_column(String(30), nullable=False)
    value: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    unit: Mapped[str] = mapped_column(String(20), nullable=False)
    achieved_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    set_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("sets.id", ondelete="SET NULL"), nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
