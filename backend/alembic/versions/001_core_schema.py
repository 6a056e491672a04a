"""Core schema — users, sessions, profiles, exercises, workouts, sets, records, goals.

Revision ID: 001_core_schema
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_core_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    cols = [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]
    if updated:
        cols.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        )
    return cols


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(100), nullable=False),
        sa.Column("role", sa.String(30), nullable=False, server_default="authenticated"),
        *_timestamps(updated=False),
    )

    op.create_table(
        "auth_sessions",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("refresh_jti", sa.String(64), nullable=False),
        sa.Column("last_refreshed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(updated=False),
    )

    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("full_name", sa.Text, nullable=True),
        sa.Column("date_of_birth", sa.Date, nullable=True),
        sa.Column("gender", sa.String(30), nullable=True),
        sa.Column("height_cm", sa.Numeric(5, 2), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "height_cm IS NULL OR (height_cm > 0 AND height_cm < 300)",
            name="profile_height_check",
        ),
    )

    op.create_table(
        "exercises",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("category", sa.String(30), nullable=False, server_default="strength"),
        sa.Column("muscle_groups", sa.JSON, nullable=False),
        sa.Column("equipment_required", sa.JSON, nullable=False),
        sa.Column("is_public", sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "name", name="user_exercise_unique"),
        sa.CheckConstraint(
            "(user_id IS NULL AND is_public) OR user_id IS NOT NULL",
            name="system_exercise_check",
        ),
    )

    op.create_table(
        "workouts",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("duration_minutes", sa.Integer, nullable=True),
        sa.Column("calories_burned", sa.Integer, nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "completed_at IS NULL OR completed_at >= started_at", name="workout_time_check",
        ),
        sa.CheckConstraint(
            "duration_minutes IS NULL OR duration_minutes > 0", name="workout_duration_check",
        ),
        sa.CheckConstraint(
            "calories_burned IS NULL OR calories_burned >= 0", name="workout_calories_check",
        ),
    )

    op.create_table(
        "workout_exercises",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("workout_id", sa.Uuid, sa.ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("exercise_id", sa.Uuid, sa.ForeignKey("exercises.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("order_in_workout", sa.Integer, nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        *_timestamps(updated=False),
        sa.UniqueConstraint("workout_id", "order_in_workout", name="workout_exercise_order_unique"),
        sa.CheckConstraint("order_in_workout > 0", name="workout_exercise_order_check"),
    )

    op.create_table(
        "sets",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column(
            "workout_exercise_id", sa.Uuid,
            sa.ForeignKey("workout_exercises.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("set_number", sa.Integer, nullable=False),
        sa.Column("reps", sa.Integer, nullable=True),
        sa.Column("weight_kg", sa.Numeric(6, 2), nullable=True),
        sa.Column("duration_seconds", sa.Integer, nullable=True),
        sa.Column("distance_meters", sa.Numeric(8, 2), nullable=True),
        sa.Column("rpe", sa.Integer, nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        *_timestamps(updated=False),
        sa.UniqueConstraint("workout_exercise_id", "set_number", name="set_order_unique"),
        sa.CheckConstraint("set_number > 0", name="set_number_check"),
        sa.CheckConstraint("reps IS NULL OR reps > 0", name="set_reps_check"),
        sa.CheckConstraint("weight_kg IS NULL OR weight_kg >= 0", name="set_weight_check"),
        sa.CheckConstraint("rpe IS NULL OR (rpe >= 1 AND rpe <= 10)", name="set_rpe_check"),
        sa.CheckConstraint(
            "reps IS NOT NULL OR duration_seconds IS NOT NULL OR distance_meters IS NOT NULL",
            name="set_data_check",
        ),
    )

    op.create_table(
        "personal_records",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("exercise_id", sa.Uuid, sa.ForeignKey("exercises.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("record_type", sa.String(30), nullable=False),
        sa.Column("value", sa.Numeric(10, 2), nullable=False),
        sa.Column("unit", sa.String(20), nullable=False),
        sa.Column("achieved_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("set_id", sa.Uuid, sa.ForeignKey("sets.id", ondelete="SET NULL"), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        *_timestamps(),
        sa.UniqueConstraint(
            "user_id", "exercise_id", "record_type", name="user_exercise_record_unique",
        ),
        sa.CheckConstraint("value > 0", name="personal_record_value_check"),
    )

    op.create_table(
        "goals",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("goal_type", sa.String(30), nullable=False),
        sa.Column("target_value", sa.Numeric(10, 2), nullable=True),
        sa.Column("target_unit", sa.String(30), nullable=True),
        sa.Column("current_value", sa.Numeric(10, 2), nullable=True),
        sa.Column("start_date", sa.Date, nullable=False, server_default=sa.func.current_date()),
        sa.Column("target_date", sa.Date, nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        *_timestamps(),
        sa.CheckConstraint(
            "target_date IS NULL OR target_date >= start_date", name="goal_date_check",
        ),
    )


def downgrade() -> None:
    for table in (
        "goals", "personal_records", "sets", "workout_exercises", "workouts",
        "exercises", "profiles", "auth_sessions", "users",
    ):
        op.drop_table(table)
