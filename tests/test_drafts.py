import pytest

from ptconnect.core.records import ExerciseDraft, RoutineDraft, SetDraft
from ptconnect.errors import ValidationError
from ptconnect.schemas.routine import build_routine_draft, routine_input_schema


@pytest.mark.parametrize("reps, expected_reps, expected_range", [
    ("8-12", None, "8-12"),
    (" 6 - 8 ", None, "6 - 8"),
    ("10", 10, None),
    (12, 12, None),
    ("abc", None, None),
    ("0", None, None),
    (None, None, None),
])
def test_set_draft_parses_reps(reps, expected_reps, expected_range):
    draft = SetDraft.parse(1, reps=reps)
    assert draft.reps == expected_reps
    assert draft.rep_range == expected_range


def test_set_draft_parses_rest():
    assert SetDraft.parse(1, rest="90").rest_seconds == 90
    assert SetDraft.parse(1, rest="").rest_seconds is None
    assert SetDraft.parse(1, rest=45).rest_seconds == 45
    assert SetDraft.parse(1, rest=60.0).rest_seconds == 60


@pytest.mark.parametrize("rest", ["1e999", "-inf", "nan", float("inf")])
def test_set_draft_rejects_non_finite_rest(rest):
    with pytest.raises(ValueError):
        SetDraft.parse(1, rest=rest)


def test_set_draft_rejects_negative_values():
    with pytest.raises(ValueError):
        SetDraft.parse(1, rest=-5)
    with pytest.raises(ValueError):
        SetDraft(set_number=1, weight=-1.0)


def test_exercise_draft_requires_name_or_catalog_id():
    with pytest.raises(ValueError):
        ExerciseDraft(position=0, name="  ")
    assert ExerciseDraft(position=0, name="", catalog_id=4).catalog_id == 4


def test_exercise_draft_requires_contiguous_sets():
    with pytest.raises(ValueError):
        ExerciseDraft(position=0, name="Squat", sets=(SetDraft(1), SetDraft(3)))


def test_exercise_draft_rejects_inverted_rep_range():
    with pytest.raises(ValueError):
        ExerciseDraft(position=0, name="Squat", reps_min=12, reps_max=8)


def test_routine_draft_requires_contiguous_positions():
    with pytest.raises(ValueError):
        RoutineDraft(pt_id=1, client_id=2, name="Legs", exercises=(
            ExerciseDraft(position=0, name="Squat"),
            ExerciseDraft(position=2, name="Lunge"),
        ))


def test_routine_draft_requires_name():
    with pytest.raises(ValueError):
        RoutineDraft(pt_id=1, client_id=2, name="   ")


def test_build_routine_draft_from_payload(app):
    payload = routine_input_schema.load({
        "clientId": 2,
        "name": "Upper A",
        "exercises": [
            {"name": " Bench Press ", "sets": [{"reps": "8-10", "rest": "90", "weight": 60}, {"reps": 8}]},
            {"catalogId": 9, "id": 33, "repsMin": 10, "repsMax": 12},
        ],
        "ignored": True,
    })
    draft = build_routine_draft(payload, pt_id=1, routine_id=5)

    assert draft.is_update
    assert draft.pt_id == 1 and draft.client_id == 2
    first, second = draft.exercises
    assert first.name == "Bench Press"
    assert first.position == 0
    assert [s.set_number for s in first.sets] == [1, 2]
    assert first.sets[0].rep_range == "8-10"
    assert first.sets[0].rest_seconds == 90
    assert first.sets[0].weight == 60.0
    assert first.sets[1].reps == 8
    assert second.catalog_id == 9
    assert second.routine_exercise_id == 33
    assert second.position == 1


def test_build_routine_draft_wraps_value_errors(app):
    payload = routine_input_schema.load({"clientId": 2, "name": "Upper A", "exercises": [{"name": ""}]})
    with pytest.raises(ValidationError):
        build_routine_draft(payload, pt_id=1)


def test_build_routine_draft_rejects_overflowing_rest(app):
    payload = routine_input_schema.load({
        "clientId": 2,
        "name": "Upper A",
        "exercises": [{"name": "Bench Press", "sets": [{"reps": "5", "rest": "1e999"}]}],
    })
    with pytest.raises(ValidationError):
        build_routine_draft(payload, pt_id=1)
