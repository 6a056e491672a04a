"""Training Stats — pure reductions over set samples, no IO.

Tests:
    - UTC week/month bucketing (weeks open on Sunday)
    - Personal records keep the earliest of equal values and sort by name
    - Progress points per workout, volume buckets newest-first
    - Streak and dashboard summary arithmetic against a fixed "now"
"""

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

from gym_tracker.core.domain_types import StatsPeriod, VolumeGrouping
from gym_tracker.core.training_stats import (
    SetSample, compute_personal_records, compute_progress, compute_streak,
    compute_summary, compute_volume, most_trained_muscle_group, period_start,
    round_half_up, volume_bucket_key, week_start,
)

UTC = timezone.utc
NOW = datetime(2026, 3, 18, 12, 0, tzinfo=UTC)  # a Wednesday


def _sample(exercise_id, when, weight, reps, muscle_group=None, workout_id=None):
    return SetSample(
        exercise_id=exercise_id,
        workout_id=workout_id or uuid4(),
        started_at=when,
        weight_kg=weight,
        reps=reps,
        muscle_group=muscle_group,
    )


# ─── Helpers ─────────────────────────────────────────────────────

def test_week_starts_on_sunday():
    assert week_start(NOW) == date(2026, 3, 15)
    assert week_start(datetime(2026, 3, 15, 0, 0, tzinfo=UTC)) == date(2026, 3, 15)
    assert week_start(datetime(2026, 3, 21, 23, 59, tzinfo=UTC)) == date(2026, 3, 15)


def test_week_start_uses_utc_date():
    # 01:00 on Sunday at +03:00 is still Saturday in UTC
    plus_three = timezone(timedelta(hours=3))
    assert week_start(datetime(2026, 3, 15, 1, 0, tzinfo=plus_three)) == date(2026, 3, 8)


def test_naive_datetimes_are_treated_as_utc():
    assert week_start(datetime(2026, 3, 18, 12, 0)) == date(2026, 3, 15)


def test_bucket_keys():
    assert volume_bucket_key(NOW, VolumeGrouping.WEEK) == "2026-03-15"
    assert volume_bucket_key(NOW, VolumeGrouping.MONTH) == "2026-03"


def test_period_start_bounds():
    assert period_start(StatsPeriod.FOUR_WEEKS, NOW) == NOW - timedelta(days=28)
    assert period_start(StatsPeriod.TWELVE_WEEKS, NOW) == NOW - timedelta(days=84)
    assert period_start(StatsPeriod.SIX_MONTHS, NOW) == NOW - timedelta(days=180)
    assert period_start(StatsPeriod.ALL, NOW) is None


def test_round_half_up():
    assert round_half_up(2.5) == 3.0
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(4 / 12, 1) == 0.3


# ─── Personal records ────────────────────────────────────────────

def test_personal_records_track_weight_reps_and_volume():
    squat = uuid4()
    t1 = datetime(2026, 3, 1, 10, 0, tzinfo=UTC)
    t2 = datetime(2026, 3, 5, 10, 0, tzinfo=UTC)
    t3 = datetime(2026, 3, 9, 10, 0, tzinfo=UTC)
    samples = [
        _sample(squat, t3, 90.0, 10),
        _sample(squat, t2, 100.0, 8),
        _sample(squat, t1, 100.0, 5),
    ]

    [record] = compute_personal_records(samples, {squat: "Squat"})

    assert record["exercise_id"] == str(squat)
    assert record["exercise_name"] == "Squat"
    # equal weights: the earliest set wins
    assert record["max_weight"] == {"value": 100.0, "reps": 5, "date": t1.isoformat()}
    assert record["max_reps"] == {"value": 10, "weight": 90.0, "date": t3.isoformat()}
    assert record["max_volume"] == {"value": 900.0, "date": t3.isoformat()}


def test_personal_records_sorted_by_name_case_insensitively():
    squat, curl = uuid4(), uuid4()
    when = datetime(2026, 3, 1, tzinfo=UTC)
    samples = [_sample(squat, when, 100.0, 5), _sample(curl, when, 20.0, 12)]

    records = compute_personal_records(samples, {squat: "Squat", curl: "arm curl"})

    assert [r["exercise_name"] for r in records] == ["arm curl", "Squat"]


def test_personal_records_empty():
    assert compute_personal_records([], {}) == []


# ─── Progress & volume ───────────────────────────────────────────

def test_progress_one_point_per_workout_oldest_first():
    bench = uuid4()
    t1 = datetime(2026, 3, 2, 18, 0, tzinfo=UTC)
    t2 = datetime(2026, 3, 9, 18, 0, tzinfo=UTC)
    samples = [
        _sample(bench, t2, 102.5, 3),
        _sample(bench, t1, 100.0, 5),
        _sample(bench, t1, 80.0, 5),
    ]

    points = compute_progress(samples)

    assert points == [
        {
            "date": t1.isoformat(),
            "avg_weight": 90.0,
            "max_weight": 100.0,
            "total_reps": 10,
            "total_volume": 900,
        },
        {
            "date": t2.isoformat(),
            "avg_weight": 102.5,
            "max_weight": 102.5,
            "total_reps": 3,
            "total_volume": 308,
        },
    ]


def test_volume_by_week_newest_bucket_first():
    ex = uuid4()
    samples = [
        _sample(ex, datetime(2026, 3, 16, tzinfo=UTC), 100.0, 10, "Chest"),
        _sample(ex, datetime(2026, 3, 17, tzinfo=UTC), 150.0, 10, "Legs"),
        _sample(ex, datetime(2026, 3, 10, tzinfo=UTC), 20.0, 10, None),
    ]

    buckets = compute_volume(samples, VolumeGrouping.WEEK)

    assert [b["period"] for b in buckets] == ["2026-03-15", "2026-03-08"]
    assert buckets[0]["total_volume"] == 2500
    assert buckets[0]["by_muscle_group"] == [
        {"muscle_group": "Legs", "volume": 1500},
        {"muscle_group": "Chest", "volume": 1000},
    ]
    assert buckets[1]["by_muscle_group"] == [{"muscle_group": "Unknown", "volume": 200}]


def test_volume_by_month():
    ex = uuid4()
    samples = [
        _sample(ex, datetime(2026, 2, 27, tzinfo=UTC), 50.0, 10, "Back"),
        _sample(ex, datetime(2026, 3, 1, tzinfo=UTC), 60.0, 10, "Back"),
    ]
    buckets = compute_volume(samples, VolumeGrouping.MONTH)
    assert [(b["period"], b["total_volume"]) for b in buckets] == [
        ("2026-03", 600), ("2026-02", 500),
    ]


def test_missing_weight_counts_as_zero_volume():
    ex = uuid4()
    samples = [_sample(ex, NOW, None, 12, "Core")]
    assert compute_volume(samples, VolumeGrouping.WEEK)[0]["total_volume"] == 0


# ─── Streak & summary ────────────────────────────────────────────

def _at(day: int, hour: int = 9) -> datetime:
    return datetime(2026, 3, day, hour, 0, tzinfo=UTC)


def test_streak_counts_consecutive_days_ending_today():
    times = [_at(18), _at(17), _at(16), _at(14)]
    assert compute_streak(times, date(2026, 3, 18)) == 3


def test_streak_may_end_yesterday():
    assert compute_streak([_at(17), _at(16)], date(2026, 3, 18)) == 2


def test_streak_broken_when_last_workout_is_older():
    assert compute_streak([_at(15)], date(2026, 3, 18)) == 0
    assert compute_streak([], date(2026, 3, 18)) == 0


def test_streak_counts_each_day_once():
    times = [_at(18, 7), _at(18, 19), _at(17)]
    assert compute_streak(times, date(2026, 3, 18)) == 2


def test_most_trained_muscle_group_none_without_sets():
    assert most_trained_muscle_group([]) is None


def test_summary():
    legs, chest = uuid4(), uuid4()
    workout_times = [
        _at(18),
        _at(17),
        _at(2),
        datetime(2026, 2, 20, 9, 0, tzinfo=UTC),
        datetime(2025, 11, 1, 9, 0, tzinfo=UTC),  # outside the 12-week average
    ]
    samples = [
        _sample(legs, _at(18), 100.0, 10, "Legs"),
        _sample(chest, _at(2), 50.0, 10, "Chest"),
    ]

    summary = compute_summary(workout_times, samples, total_exercises=4, now=NOW)

    assert summary == {
        "total_workouts": 5,
        "total_exercises": 4,
        "total_workouts_this_month": 3,
        "total_workouts_this_week": 2,
        "total_sets_this_week": 1,
        "total_sets_this_month": 2,
        "most_trained_muscle_group": "Legs",
        "current_streak": 2,
        "avg_workouts_per_week": 0.3,
    }
