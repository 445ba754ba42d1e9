"""
Plain records exchanged between the store-facing services and the pure
aggregation functions.

Row records mirror what is read from the database; view records are what the
API returns; draft records carry a routine edit into the upsert. Drafts and
views check their ordering invariants at construction, so a record that exists
is a record whose positions and set numbers are contiguous.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime

from ptconnect.utils.timeutils import isoformat_utc

ACTIVE_STATUSES = ("ACUTE", "LINGERING")


def _check_non_negative(name, value):
    if value is not None and value < 0:
        raise ValueError(f"{name} must be non-negative")


# ---------------------------------------------------------------------------
# Rows read from the store
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SetRow:
    """An explicit per-set override of a routine exercise."""

    set_number: int
    target_reps: int | None = None
    target_rep_range: str | None = None
    target_weight: float | None = None
    target_rest_seconds: int | None = None

    def __post_init__(self) -> None:
        if self.set_number is None or self.set_number < 1:
            raise ValueError("set_number must be a positive integer")


@dataclass(frozen=True)
class ExerciseRow:
    id: int
    exercise_id: int
    position: int
    name: str | None = None
    notes: str | None = None
    catalog_notes: str | None = None
    default_rest_seconds: int | None = None  # catalog-level default
    prescribed_sets: int | None = None
    reps_min: int | None = None
    reps_max: int | None = None
    weight: float | None = None
    rest_seconds: int | None = None
    sets: tuple[SetRow, ...] = ()

    def __post_init__(self) -> None:
        if self.position is None or self.position < 0:
            raise ValueError("position must be non-negative")


@dataclass(frozen=True)
class RoutineRows:
    id: int
    name: str
    pt_id: int
    client_id: int
    exercises: tuple[ExerciseRow, ...] = ()


@dataclass(frozen=True)
class CalendarEventRow:
    id: int
    client_id: int | None
    event_type: str
    start_at: datetime
    end_at: datetime
    title: str = ""


@dataclass(frozen=True)
class HealthLogRow:
    id: int
    client_id: int
    injury_title: str
    status: str
    logged_at: datetime
    details: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    def to_dict(self):
        return {
            "id": self.id,
            "status": self.status,
            "injuryTitle": self.injury_title,
            "loggedAt": isoformat_utc(self.logged_at),
        }


# ---------------------------------------------------------------------------
# Views returned to clients
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SetView:
    set_number: int
    reps: str
    rest: str
    target_weight: float | None

    def to_dict(self):
        return {
            "setNumber": self.set_number,
            "reps": self.reps,
            "rest": self.rest,
            "targetWeight": self.target_weight,
        }


@dataclass(frozen=True)
class ExerciseView:
    id: int
    exercise_id: int
    position: int
    name: str
    notes: str | None
    default_rest_seconds: int | None
    sets: tuple[SetView, ...] = ()

    def __post_init__(self) -> None:
        numbers = [s.set_number for s in self.sets]
        if any(n < 1 for n in numbers) or numbers != sorted(set(numbers)):
            raise ValueError("set numbers must be positive and strictly increasing")

    def to_dict(self):
        return {
            "id": self.id,
            "exerciseId": self.exercise_id,
            "position": self.position,
            "name": self.name,
            "notes": self.notes,
            "defaultRestSeconds": self.default_rest_seconds,
            "sets": [s.to_dict() for s in self.sets],
        }


@dataclass(frozen=True)
class RoutineView:
    id: int
    name: str
    pt_id: int
    client_id: int
    exercises: tuple[ExerciseView, ...] = ()

    def __post_init__(self) -> None:
        positions = [e.position for e in self.exercises]
        if positions != list(range(len(positions))):
            raise ValueError("exercise positions must be contiguous from 0")

    def find_exercise(self, routine_exercise_id=None, exercise_id=None, name=None):
        """Match on routine exercise id, then catalog id, then name; each across every row."""
        keys = (
            (routine_exercise_id, lambda e: e.id),
            (exercise_id, lambda e: e.exercise_id),
            (name or None, lambda e: e.name),
        )
        for wanted, key in keys:
            if wanted is None:
                continue
            for exercise in self.exercises:
                if key(exercise) == wanted:
                    return exercise
        return None

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "ptId": self.pt_id,
            "clientId": self.client_id,
            "exercises": [e.to_dict() for e in self.exercises],
        }


@dataclass(frozen=True)
class StreakStats:
    current_streak: int = 0
    longest_streak: int = 0
    last_workout_date: str | None = None  # ISO date, UTC
    total_workouts: int = 0

    def to_dict(self):
        return {
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "lastWorkoutDate": self.last_workout_date,
            "totalWorkouts": self.total_workouts,
        }


@dataclass(frozen=True)
class WeeklyGoalStats:
    goal: int
    completed: int
    week_start: datetime

    def to_dict(self):
        return {
            "goal": self.goal,
            "completed": self.completed,
            "weekStart": isoformat_utc(self.week_start),
        }


@dataclass(frozen=True)
class HealthAlert:
    event_id: int
    client_id: int
    client_name: str
    session_start: datetime
    session_end: datetime
    injury_title: str
    status: str

    def to_dict(self):
        return {
            "eventId": self.event_id,
            "clientId": self.client_id,
            "clientName": self.client_name,
            "sessionStart": isoformat_utc(self.session_start),
            "sessionEnd": isoformat_utc(self.session_end),
            "injuryTitle": self.injury_title,
            "status": self.status,
        }


# ---------------------------------------------------------------------------
# Drafts submitted by a PT
# ---------------------------------------------------------------------------

def _parse_int(value):
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    if not math.isfinite(number):
        raise ValueError("numeric values must be finite")
    return int(number)


@dataclass(frozen=True)
class SetDraft:
    set_number: int
    reps: int | None = None
    rep_range: str | None = None
    weight: float | None = None
    rest_seconds: int | None = None

    def __post_init__(self) -> None:
        if self.set_number < 1:
            raise ValueError("set_number must start at 1")
        if self.reps is not None and self.reps <= 0:
            raise ValueError("reps must be positive")
        _check_non_negative("weight", self.weight)
        _check_non_negative("rest", self.rest_seconds)

    @classmethod
    def parse(cls, set_number, reps=None, rest=None, weight=None):
        """
        Build a set from loosely typed form values.

        A reps string containing "-" is kept as a rep range; anything else is
        read as a whole number of reps, and non-numeric text is dropped.
        """
        rep_range = None
        target_reps = None
        if isinstance(reps, str) and "-" in reps:
            rep_range = reps.strip()
        else:
            target_reps = _parse_int(reps)
            if target_reps is not None and target_reps <= 0:
                target_reps = None
        return cls(
            set_number=set_number,
            reps=target_reps,
            rep_range=rep_range,
            weight=weight,
            rest_seconds=_parse_int(rest),
        )


@dataclass(frozen=True)
class ExerciseDraft:
    position: int
    name: str
    catalog_id: int | None = None
    routine_exercise_id: int | None = None
    notes: str | None = None
    default_rest_seconds: int | None = None
    prescribed_sets: int | None = None
    reps_min: int | None = None
    reps_max: int | None = None
    weight: float | None = None
    rest_seconds: int | None = None
    sets: tuple[SetDraft, ...] = ()

    def __post_init__(self) -> None:
        if self.position < 0:
            raise ValueError("position must be non-negative")
        if not (self.name or "").strip() and self.catalog_id is None:
            raise ValueError("exercise name is required")
        numbers = [s.set_number for s in self.sets]
        if numbers != list(range(1, len(numbers) + 1)):
            raise ValueError("set numbers must be contiguous from 1")
        if self.prescribed_sets is not None and self.prescribed_sets <= 0:
            raise ValueError("prescribed_sets must be positive")
        if self.reps_min is not None and self.reps_min <= 0:
            raise ValueError("reps_min must be positive")
        if self.reps_min is not None and self.reps_max is not None and self.reps_max < self.reps_min:
            raise ValueError("reps_max must not be below reps_min")
        _check_non_negative("weight", self.weight)
        _check_non_negative("rest_seconds", self.rest_seconds)
        _check_non_negative("default_rest_seconds", self.default_rest_seconds)


@dataclass(frozen=True)
class RoutineDraft:
    pt_id: int
    client_id: int
    name: str
    exercises: tuple[ExerciseDraft, ...] = ()
    routine_id: int | None = None
    description: str | None = None
    goal_focus: str | None = None

    def __post_init__(self) -> None:
        if not (self.name or "").strip():
            raise ValueError("routine name is required")
        positions = [e.position for e in self.exercises]
        if positions != list(range(len(positions))):
            raise ValueError("exercise positions must be contiguous from 0")

    @property
    def is_update(self) -> bool:
        return self.routine_id is not None


@dataclass(frozen=True)
class LoggedSetDraft:
    weight: float | None = None
    reps: int | None = None
    rpe: float | None = None
    rest_seconds: int | None = None


@dataclass(frozen=True)
class LoggedExerciseDraft:
    routine_exercise_id: int | None = None
    exercise_id: int | None = None
    name: str | None = None
    sets: tuple[LoggedSetDraft, ...] = field(default_factory=tuple)
