"""
Denormalize a routine's exercise and set rows into the client-facing view.

Reps resolve as: set rep range, set reps, prescribed min/max range, policy
default. Rest resolves as: set override, exercise prescription, catalog
default, policy default. Weight resolves as: set weight, exercise weight, None.
"""

from dataclasses import dataclass

from ptconnect.core.records import ExerciseView, RoutineView, SetView

FALLBACK_EXERCISE_NAME = "Exercise"


@dataclass(frozen=True)
class RoutineViewPolicy:
    """Values used when neither the set, the exercise nor the catalog says."""

    default_reps: str = "10"
    default_rest: str = ""

    @classmethod
    def from_config(cls, config):
        return cls(
            default_reps=str(config.get("ROUTINE_VIEW_DEFAULT_REPS", cls.default_reps)),
            default_rest=str(config.get("ROUTINE_VIEW_DEFAULT_REST", cls.default_rest)),
        )


DEFAULT_POLICY = RoutineViewPolicy()


def format_reps_fallback(reps_min, reps_max, policy=DEFAULT_POLICY):
    if reps_min and reps_max and reps_min != reps_max:
        return f"{reps_min}-{reps_max}"
    if reps_min:
        return str(reps_min)
    return policy.default_reps


def _format_rest(seconds, policy):
    return str(seconds) if seconds is not None else policy.default_rest


def build_set_views(exercise, policy=DEFAULT_POLICY):
    """Resolve the ordered set list for one ``ExerciseRow``."""
    fallback_reps = format_reps_fallback(exercise.reps_min, exercise.reps_max, policy)
    exercise_rest = (
        exercise.rest_seconds if exercise.rest_seconds is not None else exercise.default_rest_seconds
    )

    if exercise.sets:
        views = []
        seen = set()
        for row in sorted(exercise.sets, key=lambda s: s.set_number):
            if row.set_number in seen:
                continue
            seen.add(row.set_number)

            if row.target_rep_range:
                reps = row.target_rep_range
            elif row.target_reps:
                reps = str(row.target_reps)
            else:
                reps = fallback_reps
            rest = row.target_rest_seconds if row.target_rest_seconds is not None else exercise_rest
            weight = row.target_weight if row.target_weight is not None else exercise.weight
            views.append(SetView(
                set_number=row.set_number,
                reps=reps,
                rest=_format_rest(rest, policy),
                target_weight=weight,
            ))
        return tuple(views)

    total_sets = exercise.prescribed_sets or 0
    return tuple(
        SetView(
            set_number=index + 1,
            reps=fallback_reps,
            rest=_format_rest(exercise_rest, policy),
            target_weight=exercise.weight,
        )
        for index in range(total_sets)
    )


def build_routine_view(routine, policy=DEFAULT_POLICY):
    """Build a ``RoutineView`` from ``RoutineRows``; exercises ordered by position."""
    exercises = []
    for index, row in enumerate(sorted(routine.exercises, key=lambda e: e.position)):
        exercises.append(ExerciseView(
            id=row.id,
            exercise_id=row.exercise_id,
            position=index,
            name=row.name or FALLBACK_EXERCISE_NAME,
            notes=row.notes if row.notes is not None else row.catalog_notes,
            default_rest_seconds=row.default_rest_seconds,
            sets=build_set_views(row, policy),
        ))

    return RoutineView(
        id=routine.id,
        name=routine.name,
        pt_id=routine.pt_id,
        client_id=routine.client_id,
        exercises=tuple(exercises),
    )
