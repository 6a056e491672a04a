"""Indexes — per-user lookups and time-ordered scans used by the API.

Revision ID: 002_indexes
Revises: 001_core_schema
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_indexes"
down_revision: Union[str, None] = "001_core_schema"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# (index name, table, columns)
_INDEXES = (
    ("ix_auth_sessions_user_id", "auth_sessions", ["user_id"]),
    ("ix_exercises_user_id", "exercises", ["user_id"]),
    ("ix_exercises_user_name", "exercises", ["user_id", "name"]),
    ("ix_workouts_user_id", "workouts", ["user_id"]),
    ("ix_workout_exercises_workout_id", "workout_exercises", ["workout_id"]),
    ("ix_workout_exercises_exercise_id", "workout_exercises", ["exercise_id"]),
    ("ix_sets_workout_exercise_id", "sets", ["workout_exercise_id"]),
    ("ix_personal_records_user_id", "personal_records", ["user_id"]),
    ("ix_personal_records_exercise_id", "personal_records", ["exercise_id"]),
    ("ix_goals_user_id", "goals", ["user_id"]),
    ("ix_goals_user_status_target", "goals", ["user_id", "status", "target_date"]),
)


def upgrade() -> None:
    for name, table, columns in _INDEXES:
        op.create_index(name, table, columns)
    op.create_index(
        "ix_workouts_user_time", "workouts", ["user_id", sa.text("started_at DESC")],
    )
    op.create_index(
        "ix_personal_records_user_achieved", "personal_records",
        ["user_id", sa.text("achieved_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("ix_personal_records_user_achieved", table_name="personal_records")
    op.drop_index("ix_workouts_user_time", table_name="workouts")
    for name, table, _ in reversed(_INDEXES):
        op.drop_index(name, table_name=table)
