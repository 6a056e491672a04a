"""Workout Layout — grouping logged sets per exercise and workout defaults."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from gym_tracker.core.workout_layout import (
    default_workout_name, derived_duration_minutes, find_duplicate_set_numbers,
    group_sets_by_exercise,
)

UTC = timezone.utc


@dataclass
class _Set:
    exercise_id: UUID
    set_number: int


def test_groups_in_first_appearance_order():
    squat, bench = uuid4(), uuid4()
    sets = [_Set(bench, 1), _Set(squat, 1), _Set(bench, 2), _Set(squat, 2)]

    groups = group_sets_by_exercise(sets)

    assert [exercise_id for exercise_id, _ in groups] == [bench, squat]
    assert [s.set_number for s in groups[0][1]] == [1, 2]


def test_duplicate_set_numbers_are_per_exercise():
    squat, bench = uuid4(), uuid4()
    assert find_duplicate_set_numbers([_Set(squat, 1), _Set(bench, 1)]) == []
    assert find_duplicate_set_numbers(
        [_Set(squat, 1), _Set(squat, 1), _Set(squat, 1)]
    ) == [(squat, 1)]


def test_default_name_uses_utc_date_without_padding():
    assert default_workout_name(datetime(2026, 1, 5, 8, 0, tzinfo=UTC)) == "Workout 1/5/2026"
    late_evening = datetime(2026, 1, 5, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    assert default_workout_name(late_evening) == "Workout 1/6/2026"


def test_derived_duration_in_whole_minutes():
    start = datetime(2026, 3, 1, 10, 0, tzinfo=UTC)
    assert derived_duration_minutes(start, start + timedelta(minutes=75, seconds=40)) == 75
    assert derived_duration_minutes(start, start + timedelta(seconds=30)) is None
