from marshmallow import EXCLUDE, fields, validate

from ptconnect.core.records import ExerciseDraft, RoutineDraft, SetDraft
from ptconnect.errors import ValidationError
from ptconnect.extensions import ma


class SetInputSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    # reps may be a number or a range string such as "8-12"
    reps = fields.Raw(allow_none=True, load_default=None)
    rest = fields.Raw(allow_none=True, load_default=None)
    weight = fields.Float(allow_none=True, load_default=None, validate=validate.Range(min=0))


class ExerciseInputSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Int(allow_none=True, load_default=None)
    catalog_id = fields.Int(data_key="catalogId", allow_none=True, load_default=None)
    name = fields.Str(load_default="")
    notes = fields.Str(allow_none=True, load_default=None)
    default_rest_seconds = fields.Int(data_key="defaultRestSeconds", allow_none=True, load_default=None)
    prescribed_sets = fields.Int(data_key="prescribedSets", allow_none=True, load_default=None)
    reps_min = fields.Int(data_key="repsMin", allow_none=True, load_default=None)
    reps_max = fields.Int(data_key="repsMax", allow_none=True, load_default=None)
    weight = fields.Float(allow_none=True, load_default=None)
    rest_seconds = fields.Int(data_key="restSeconds", allow_none=True, load_default=None)
    sets = fields.List(fields.Nested(SetInputSchema), load_default=list)


class RoutineInputSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    client_id = fields.Int(data_key="clientId", required=True)
    name = fields.Str(required=True, validate=validate.Length(min=1, max=150))
    description = fields.Str(allow_none=True, load_default=None)
    goal_focus = fields.Str(data_key="goalFocus", allow_none=True, load_default=None)
    exercises = fields.List(fields.Nested(ExerciseInputSchema), load_default=list)


routine_input_schema = RoutineInputSchema()


def build_routine_draft(payload, pt_id, routine_id=None):
    """Turn a loaded ``RoutineInputSchema`` payload into a validated ``RoutineDraft``."""
    try:
        exercises = tuple(
            ExerciseDraft(
                position=position,
                name=(item["name"] or "").strip(),
                catalog_id=item["catalog_id"],
                routine_exercise_id=item["id"],
                notes=item["notes"],
                default_rest_seconds=item["default_rest_seconds"],
                prescribed_sets=item["prescribed_sets"],
                reps_min=item["reps_min"],
                reps_max=item["reps_max"],
                weight=item["weight"],
                rest_seconds=item["rest_seconds"],
                sets=tuple(
                    SetDraft.parse(number, reps=s["reps"], rest=s["rest"], weight=s["weight"])
                    for number, s in enumerate(item["sets"], start=1)
                ),
            )
            for position, item in enumerate(payload["exercises"])
        )
        return RoutineDraft(
            pt_id=pt_id,
            client_id=payload["client_id"],
            name=payload["name"],
            exercises=exercises,
            routine_id=routine_id,
            description=payload["description"],
            goal_focus=payload["goal_focus"],
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e
