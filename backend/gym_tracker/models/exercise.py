"""Exercise ORM — a movement a user logs sets against.

Invariants:
    - (user_id, name) is unique
    - muscle_groups / equipment_required are lists; the API exposes their first element
    - user_id NULL is only allowed for public (shared) exercises

Design Decisions:
    - JSON lists over Postgres TEXT[]: same shape on PostgreSQL and the SQLite test DB
    - No cascade to workout_exercises: an exercise in use cannot be deleted (RESTRICT)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON, Boolean, CheckConstraint, DateTime, ForeignKey, String, Text,
    UniqueConstraint, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from gym_tracker.db.base import Base


class Exercise(Base):
    __tablename__ = "exercises"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="user_exercise_unique"),
        CheckConstraint(
            "(user_id IS NULL AND is_public) OR user_id IS NOT NULL",
            name="system_exercise_check",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(
        String(30), nullable=False, default="strength",
    )
    muscle_groups: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    equipment_required: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
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

    @property
    def primary_muscle_group(self) -> str | None:
        return self.muscle_groups[0] if self.muscle_groups else None

    @property
    def primary_equipment(self) -> str | None:
        return self.equipment_required[0] if self.equipment_required else None
