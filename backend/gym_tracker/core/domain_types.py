"""Domain Types — closed vocabularies shared by schemas, models and services.

Invariants:
    - Every closed vocabulary (muscle group, category, record type...) is an Enum
    - Enum values are the exact strings stored in the database and sent over the wire

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum


# ─── Exercises ───────────────────────────────────────────────────

class MuscleGroup(str, Enum):
    CHEST = "Chest"
    BACK = "Back"
    LEGS = "Legs"
    SHOULDERS = "Shoulders"
    ARMS = "Arms"
    CORE = "Core"
    FULL_BODY = "Full Body"


class EquipmentType(str, Enum):
    BARBELL = "Barbell"
    DUMBBELL = "Dumbbell"
    MACHINE = "Machine"
    BODYWEIGHT = "Bodyweight"
    CABLE = "Cable"
    RESISTANCE_BAND = "Resistance Band"
    OTHER = "Other"


class ExerciseCategory(str, Enum):
    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
    BALANCE = "balance"
    PLYOMETRIC = "plyometric"
    OLYMPIC = "olympic"
    POWERLIFTING = "powerlifting"
    BODYWEIGHT = "bodyweight"
    OTHER = "other"


class ExerciseSort(str, Enum):
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    CREATED_ASC = "created_asc"
    CREATED_DESC = "created_desc"


# ─── Statistics ──────────────────────────────────────────────────

class StatsPeriod(str, Enum):
    """Look-back window applied to workout start time."""
    FOUR_WEEKS = "4weeks"
    TWELVE_WEEKS = "12weeks"
    SIX_MONTHS = "6months"
    ALL = "all"


class VolumeGrouping(str, Enum):
    WEEK = "week"
    MONTH = "month"


class RecordType(str, Enum):
    """Persisted personal record kinds — one row per (user, exercise, type)."""
    MAX_WEIGHT = "max_weight"
    MAX_REPS = "max_reps"
    MAX_DISTANCE = "max_distance"
    FASTEST_TIME = "fastest_time"
    MAX_VOLUME = "max_volume"
    LONGEST_DURATION = "longest_duration"


class RecordUnit(str, Enum):
    KG = "kg"
    LBS = "lbs"
    REPS = "reps"
    METERS = "meters"
    KM = "km"
    MILES = "miles"
    SECONDS = "seconds"
    MINUTES = "minutes"


# ─── Profiles & Goals ────────────────────────────────────────────

class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    NON_BINARY = "non-binary"
    PREFER_NOT_TO_SAY = "prefer-not-to-say"
    OTHER = "other"


class GoalType(str, Enum):
    WEIGHT_LOSS = "weight_loss"
    WEIGHT_GAIN = "weight_gain"
    MUSCLE_GAIN = "muscle_gain"
    STRENGTH = "strength"
    ENDURANCE = "endurance"
    FLEXIBILITY = "flexibility"
    BODY_COMPOSITION = "body_composition"
    PERFORMANCE = "performance"
    HABIT = "habit"
    OTHER = "other"


class GoalStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ABANDONED = "abandoned"
    PAUSED = "paused"
