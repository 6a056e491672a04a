"""Workout Layout — pure rules for turning a flat list of logged sets into a workout.

Invariants:
    - Exercises are ordered by first appearance in the submitted sets (order 1, 2, ...)
    - Sets keep their submitted order inside each exercise
    - A set_number may appear only once per exercise within a workout
    - Duration derived from start/end is whole minutes, never zero or negative

Design Decisions:
    - Generic over the set type (anything with exercise_id / set_number attributes)
      so schemas and tests can both feed it
"""

from datetime import datetime
from typing import Protocol, Sequence, TypeVar
from uuid import UUID

from gym_tracker.core.clock import ensure_utc


class LoggedSet(Protocol):
    exercise_id: UUID
    set_number: int


S = TypeVar("S", bound=LoggedSet)


def group_sets_by_exercise(sets: Sequence[S]) -> list[tuple[UUID, list[S]]]:
    """Group sets per exercise, preserving first-appearance order."""
    groups: dict[UUID, list[S]] = {}
    for logged in sets:
        groups.setdefault(logged.exercise_id, []).append(logged)
    return list(groups.items())


def find_duplicate_set_numbers(sets: Sequence[LoggedSet]) -> list[tuple[UUID, int]]:
    """(exercise_id, set_number) pairs submitted more than once."""
    seen: set[tuple[UUID, int]] = set()
    duplicates: list[tuple[UUID, int]] = []
    for logged in sets:
        key = (logged.exercise_id, logged.set_number)
        if key in seen and key not in duplicates:
            duplicates.append(key)
        seen.add(key)
    return duplicates


def default_workout_name(workout_date: datetime) -> str:
    """Display name like "Workout 1/21/2026" for the workout's UTC date."""
    day = ensure_utc(workout_date)
    return f"Workout {day.month}/{day.day}/{day.year}"


def derived_duration_minutes(started_at: datetime, completed_at: datetime) -> int | None:
    """Whole minutes between start and completion, or None when under a minute."""
    elapsed = ensure_utc(completed_at) - ensure_utc(started_at)
    minutes = int(elapsed.total_seconds() // 60)
    return minutes if minutes > 0 else None
