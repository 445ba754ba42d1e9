import pytest

from ptconnect.core.records import ExerciseRow, RoutineRows, SetRow
from ptconnect.core.routine_view import (
    RoutineViewPolicy,
    build_routine_view,
    build_set_views,
    format_reps_fallback,
)


def _exercise(id=1, position=0, **kwargs):
    kwargs.setdefault("exercise_id", 100 + id)
    kwargs.setdefault("name", f"Exercise {id}")
    return ExerciseRow(id=id, position=position, **kwargs)


def _routine(*exercises):
    return RoutineRows(id=7, name="Push day", pt_id=1, client_id=2, exercises=tuple(exercises))


# ---------------------------------------------------------------------------
# Reps fallback
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("reps_min, reps_max, expected", [
    (8, 12, "8-12"),
    (8, 8, "8"),
    (8, None, "8"),
    (None, 12, "10"),
    (None, None, "10"),
])
def test_format_reps_fallback(reps_min, reps_max, expected):
    assert format_reps_fallback(reps_min, reps_max) == expected


def test_policy_default_reps_is_configurable():
    policy = RoutineViewPolicy.from_config({"ROUTINE_VIEW_DEFAULT_REPS": "12", "ROUTINE_VIEW_DEFAULT_REST": "90"})
    assert format_reps_fallback(None, None, policy) == "12"
    views = build_set_views(_exercise(prescribed_sets=1), policy)
    assert views[0].rest == "90"


# ---------------------------------------------------------------------------
# Set resolution
# ---------------------------------------------------------------------------

def test_explicit_sets_override_prescription():
    exercise = _exercise(
        prescribed_sets=5,
        reps_min=8,
        reps_max=12,
        weight=40.0,
        rest_seconds=90,
        sets=(
            SetRow(set_number=2, target_reps=6, target_weight=50.0),
            SetRow(set_number=1, target_rep_range="10-12", target_rest_seconds=60),
            SetRow(set_number=3),
        ),
    )
    views = build_set_views(exercise)

    assert [v.set_number for v in views] == [1, 2, 3]
    assert [v.reps for v in views] == ["10-12", "6", "8-12"]
    assert [v.rest for v in views] == ["60", "90", "90"]
    assert [v.target_weight for v in views] == [40.0, 50.0, 40.0]


def test_duplicate_set_numbers_keep_first():
    exercise = _exercise(sets=(
        SetRow(set_number=1, target_reps=5),
        SetRow(set_number=1, target_reps=9),
    ))
    views = build_set_views(exercise)
    assert len(views) == 1
    assert views[0].reps == "5"


def test_synthesized_sets_from_prescription():
    exercise = _exercise(prescribed_sets=3, reps_min=6, reps_max=8, weight=20.0, default_rest_seconds=120)
    views = build_set_views(exercise)

    assert [v.set_number for v in views] == [1, 2, 3]
    assert all(v.reps == "6-8" for v in views)
    assert all(v.rest == "120" for v in views)
    assert all(v.target_weight == 20.0 for v in views)


def test_exercise_rest_beats_catalog_default():
    views = build_set_views(_exercise(prescribed_sets=1, rest_seconds=45, default_rest_seconds=120))
    assert views[0].rest == "45"


def test_zero_rest_is_kept():
    views = build_set_views(_exercise(prescribed_sets=1, rest_seconds=0, default_rest_seconds=120))
    assert views[0].rest == "0"


def test_no_sets_and_no_prescription_gives_empty_list():
    assert build_set_views(_exercise()) == ()


# ---------------------------------------------------------------------------
# Routine view
# ---------------------------------------------------------------------------

def test_exercises_ordered_and_reindexed_by_position():
    view = build_routine_view(_routine(
        _exercise(id=1, position=4, prescribed_sets=1),
        _exercise(id=2, position=0, prescribed_sets=1),
        _exercise(id=3, position=2, prescribed_sets=1),
    ))
    assert [e.id for e in view.exercises] == [2, 3, 1]
    assert [e.position for e in view.exercises] == [0, 1, 2]


def test_missing_catalog_name_and_notes_fallback():
    view = build_routine_view(_routine(
        _exercise(id=1, name=None, catalog_notes="Keep elbows in"),
        _exercise(id=2, position=1, notes="Slow eccentric", catalog_notes="Ignored"),
    ))
    first, second = view.exercises
    assert first.name == "Exercise"
    assert first.notes == "Keep elbows in"
    assert second.notes == "Slow eccentric"


def test_empty_routine():
    view = build_routine_view(_routine())
    assert view.exercises == ()
    assert view.to_dict() == {"id": 7, "name": "Push day", "ptId": 1, "clientId": 2, "exercises": []}


def test_view_to_dict_shape():
    view = build_routine_view(_routine(
        _exercise(id=5, prescribed_sets=1, reps_min=10, rest_seconds=60, weight=12.5),
    ))
    exercise = view.to_dict()["exercises"][0]
    assert exercise["id"] == 5
    assert exercise["exerciseId"] == 105
    assert exercise["position"] == 0
    assert exercise["sets"] == [{"setNumber": 1, "reps": "10", "rest": "60", "targetWeight": 12.5}]


def test_find_exercise_by_each_key():
    view = build_routine_view(_routine(
        _exercise(id=1, prescribed_sets=1),
        _exercise(id=2, position=1, prescribed_sets=1),
    ))
    assert view.find_exercise(routine_exercise_id=2).id == 2
    assert view.find_exercise(exercise_id=101).id == 1
    assert view.find_exercise(name="Exercise 2").id == 2
    assert view.find_exercise(exercise_id=999) is None


def test_set_row_rejects_non_positive_number():
    with pytest.raises(ValueError):
        SetRow(set_number=0)
