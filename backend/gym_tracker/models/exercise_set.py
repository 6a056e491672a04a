"""Set ORM — one performed set of an exercise within a workout.

Invariants:
    - set_number is unique per workout_exercise and > 0
    - At least one of reps / duration_seconds / distance_meters is recorded
    - rpe, when present, is within 1..10
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, DateTime, ForeignKey, Integer, Numeric, Text,
    UniqueConstraint, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from gym_tracker.db.base import Base


class ExerciseSet(Base):
    __tablename__ = "sets"
    __table_args__ = (
        UniqueConstraint("workout_exercise_id", "set_number", name="set_order_unique"),
        CheckConstraint("set_number > 0", name="set_number_check"),
        CheckConstraint("reps IS NULL OR reps > 0", name="set_reps_check"),
        CheckConstraint("weight_kg IS NULL OR weight_kg >= 0", name="set_weight_check"),
        CheckConstraint("rpe IS NULL OR (rpe >= 1 AND rpe <= 10)", name="set_rpe_check"),
        CheckConstraint(
            "reps IS NOT NULL OR duration_seconds IS NOT NULL "
            "OR distance_meters IS NOT NULL",
            name="set_data_check",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    workout_exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("workout_exercises.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    set_number: Mapped[int] = mapped_column(Integer, nullable=False)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight_kg: Mapped[float | None] = mapped_column(
        Numeric(6, 2, asdecimal=False), nullable=True,
    )
    duration_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    distance_meters: Mapped[float | None] = mapped_column(
        Numeric(8, 2, asdecimal=False), nullable=True,
    )
    rpe: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
