"""Training Statistics — pure reductions over logged sets and workouts.

Invariants:
    - All inputs are plain values (SetSample, datetimes); no IO, no DB, no clock reads
    - "now" is always passed in, so every result is reproducible in tests
    - Volume of a set = weight_kg × reps; a missing weight or rep count contributes 0
    - Time buckets are computed in UTC; weeks start on Sunday
    - Returned structures are JSON-ready (dates as ISO strings, numbers rounded)

Design Decisions:
    - Pure functions, not methods on ORM rows: stats are presentation, rows are persistence
    - Rounding is half-up, matching what the web client shows for the same numbers
    - Personal-record ties keep the earliest occurrence (samples sorted by start time first)
"""

import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable
from uuid import UUID

from gym_tracker.core.clock import ensure_utc
from gym_tracker.core.domain_types import StatsPeriod, VolumeGrouping

UNKNOWN_MUSCLE_GROUP = "Unknown"
UNKNOWN_EXERCISE = "Unknown"
SUMMARY_AVERAGE_WEEKS = 12

PERIOD_DAYS: dict[StatsPeriod, int | None] = {
    StatsPeriod.FOUR_WEEKS: 28,
    StatsPeriod.TWELVE_WEEKS: 84,
    StatsPeriod.SIX_MONTHS: 180,
    StatsPeriod.ALL: None,
}


@dataclass(frozen=True)
class SetSample:
    """One logged set joined with the workout and exercise it belongs to."""
    exercise_id: UUID
    workout_id: UUID
    started_at: datetime
    weight_kg: float | None
    reps: int | None
    muscle_group: str | None = None


# ─── Helpers ─────────────────────────────────────────────────────

def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def set_volume(sample: SetSample) -> float:
    return (sample.weight_kg or 0) * (sample.reps or 0)


def period_start(period: StatsPeriod, now: datetime) -> datetime | None:
    """Lower bound on workout start time for a look-back period (None = unbounded)."""
    days = PERIOD_DAYS[period]
    if days is None:
        return None
    return ensure_utc(now) - timedelta(days=days)


def week_start(moment: datetime) -> date:
    """Sunday that opens the UTC week containing moment."""
    day = ensure_utc(moment).date()
    return day - timedelta(days=(day.weekday() + 1) % 7)


def start_of_week(now: datetime) -> datetime:
    now = ensure_utc(now)
    sunday = week_start(now)
    return now.replace(
        year=sunday.year, month=sunday.month, day=sunday.day,
        hour=0, minute=0, second=0, microsecond=0,
    )


def start_of_month(now: datetime) -> datetime:
    return ensure_utc(now).replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def volume_bucket_key(moment: datetime, grouping: VolumeGrouping) -> str:
    moment = ensure_utc(moment)
    if grouping == VolumeGrouping.MONTH:
        return f"{moment.year:04d}-{moment.month:02d}"
    return week_start(moment).isoformat()


def _chronological(samples: Iterable[SetSample]) -> list[SetSample]:
    return sorted(samples, key=lambda s: ensure_utc(s.started_at))


# ─── Personal records ────────────────────────────────────────────

def compute_personal_records(
    samples: Iterable[SetSample], exercise_names: dict[UUID, str],
) -> list[dict]:
    """Best weight, reps and single-set volume per exercise, sorted by exercise name."""
    records: dict[UUID, dict] = {}
    for sample in _chronological(samples):
        weight = sample.weight_kg or 0
        reps = sample.reps or 0
        volume = set_volume(sample)
        when = ensure_utc(sample.started_at).isoformat()

        current = records.get(sample.exercise_id)
        if current is None:
            records[sample.exercise_id] = {
                "exercise_id": str(sample.exercise_id),
                "max_weight": {"value": weight, "reps": reps, "date": when},
                "max_reps": {"value": reps, "weight": weight, "date": when},
                "max_volume": {"value": volume, "date": when},
            }
            continue
        if weight > current["max_weight"]["value"]:
            current["max_weight"] = {"value": weight, "reps": reps, "date": when}
        if reps > current["max_reps"]["value"]:
            current["max_reps"] = {"value": reps, "weight": weight, "date": when}
        if volume > current["max_volume"]["value"]:
            current["max_volume"] = {"value": volume, "date": when}

    result = []
    for exercise_id, record in records.items():
        record["exercise_name"] = exercise_names.get(exercise_id, UNKNOWN_EXERCISE)
        result.append(record)
    result.sort(key=lambda r: r["exercise_name"].lower())
    return result


# ─── Progress ────────────────────────────────────────────────────

def compute_progress(samples: Iterable[SetSample]) -> list[dict]:
    """One data point per workout start time, oldest first."""
    by_workout: dict[datetime, dict] = {}
    for sample in samples:
        when = ensure_utc(sample.started_at)
        weight = sample.weight_kg or 0
        point = by_workout.setdefault(when, {
            "weights": [], "total_reps": 0, "total_volume": 0.0, "max_weight": weight,
        })
        point["weights"].append(weight)
        point["total_reps"] += sample.reps or 0
        point["total_volume"] += set_volume(sample)
        point["max_weight"] = max(point["max_weight"], weight)

    return [
        {
            "date": when.isoformat(),
            "avg_weight": round_half_up(sum(p["weights"]) / len(p["weights"]), 2),
            "max_weight": p["max_weight"],
            "total_reps": p["total_reps"],
            "total_volume": int(round_half_up(p["total_volume"])),
        }
        for when, p in sorted(by_workout.items())
    ]


# ─── Volume ──────────────────────────────────────────────────────

def compute_volume(
    samples: Iterable[SetSample], grouping: VolumeGrouping,
) -> list[dict]:
    """Volume per time bucket broken down by muscle group, newest bucket first."""
    totals: dict[str, float] = defaultdict(float)
    by_group: dict[str, dict[str, float]] = defaultdict(lambda: defaultdict(float))
    for sample in samples:
        key = volume_bucket_key(sample.started_at, grouping)
        volume = set_volume(sample)
        totals[key] += volume
        by_group[key][sample.muscle_group or UNKNOWN_MUSCLE_GROUP] += volume

    buckets = []
    for key in sorted(totals, reverse=True):
        groups = [
            {"muscle_group": group, "volume": int(round_half_up(volume))}
            for group, volume in by_group[key].items()
        ]
        groups.sort(key=lambda g: g["volume"], reverse=True)
        buckets.append({
            "period": key,
            "total_volume": int(round_half_up(totals[key])),
            "by_muscle_group": groups,
        })
    return buckets


# ─── Streaks & summary ───────────────────────────────────────────

def compute_streak(workout_times: Iterable[datetime], today: date) -> int:
    """Consecutive training days ending today or yesterday (UTC dates)."""
    days = sorted({ensure_utc(t).date() for t in workout_times}, reverse=True)
    if not days or days[0] not in (today, today - timedelta(days=1)):
        return 0
    streak = 1
    for previous, current in zip(days, days[1:]):
        if (previous - current).days > 1:
            break
        streak += 1
    return streak


def most_trained_muscle_group(samples: Iterable[SetSample]) -> str | None:
    volumes: dict[str, float] = {}
    for sample in samples:
        group = sample.muscle_group or UNKNOWN_MUSCLE_GROUP
        volumes[group] = volumes.get(group, 0.0) + set_volume(sample)
    if not volumes:
        return None
    return sorted(volumes.items(), key=lambda item: item[1], reverse=True)[0][0]


def compute_summary(
    workout_times: list[datetime],
    samples: list[SetSample],
    total_exercises: int,
    now: datetime,
) -> dict:
    """Dashboard summary for one user. workout_times holds one entry per workout."""
    now = ensure_utc(now)
    week_floor = start_of_week(now)
    month_floor = start_of_month(now)
    average_floor = now - timedelta(weeks=SUMMARY_AVERAGE_WEEKS)
    times = [ensure_utc(t) for t in workout_times]

    recent = sum(1 for t in times if t >= average_floor)
    return {
        "total_workouts": len(times),
        "total_exercises": total_exercises,
        "total_workouts_this_month": sum(1 for t in times if t >= month_floor),
        "total_workouts_this_week": sum(1 for t in times if t >= week_floor),
        "total_sets_this_week": sum(
            1 for s in samples if ensure_utc(s.started_at) >= week_floor
        ),
        "total_sets_this_month": sum(
            1 for s in samples if ensure_utc(s.started_at) >= month_floor
        ),
        "most_trained_muscle_group": most_trained_muscle_group(samples),
        "current_streak": compute_streak(times, now.date()),
        "avg_workouts_per_week": round_half_up(recent / SUMMARY_AVERAGE_WEEKS, 1),
    }
