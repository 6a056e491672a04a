"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every user-owned table carries user_id directly or through its parent workout

Design Decisions:
    - One file per aggregate for locality
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from gym_tracker.models.user import User, AuthSession  # noqa: F401
from gym_tracker.models.profile import Profile  # noqa: F401
from gym_tracker.models.exercise import Exercise  # noqa: F401
from gym_tracker.models.workout import Workout, WorkoutExercise  # noqa: F401
from gym_tracker.models.exercise_set import ExerciseSet  # noqa: F401
from gym_tracker.models.personal_record import PersonalRecord  # noqa: F401
from gym_tracker.models.goal import Goal  # noqa: F401
