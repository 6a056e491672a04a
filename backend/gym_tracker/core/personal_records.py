"""Personal Record Detection — decides which stored records a newly logged set beats.

Invariants:
    - detect_record_updates is PURE: returns update descriptors, never writes
    - Only strictly greater values replace a record (ties keep the older record)
    - Missing or non-positive set values never produce a record (records are > 0)

Design Decisions:
    - One tracked metric per set column; the shell upserts the returned descriptors
"""

from dataclasses import dataclass

from gym_tracker.core.domain_types import RecordType, RecordUnit

# (set attribute, record type, unit) for every metric tracked on insert
TRACKED_METRICS: tuple[tuple[str, RecordType, RecordUnit], ...] = (
    ("weight_kg", RecordType.MAX_WEIGHT, RecordUnit.KG),
    ("reps", RecordType.MAX_REPS, RecordUnit.REPS),
    ("distance_meters", RecordType.MAX_DISTANCE, RecordUnit.METERS),
    ("duration_seconds", RecordType.LONGEST_DURATION, RecordUnit.SECONDS),
)


@dataclass(frozen=True)
class RecordUpdate:
    record_type: RecordType
    value: float
    unit: RecordUnit


def detect_record_updates(
    set_values: dict[str, float | int | None],
    current_records: dict[RecordType, float],
) -> list[RecordUpdate]:
    """Compare one set against the user's current records for the same exercise."""
    updates = []
    for attribute, record_type, unit in TRACKED_METRICS:
        value = set_values.get(attribute)
        if value is None or value <= 0:
            continue
        best = current_records.get(record_type)
        if best is None or value > best:
            updates.append(RecordUpdate(record_type, float(value), unit))
    return updates
