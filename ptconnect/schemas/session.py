from marshmallow import EXCLUDE, fields, post_load, validate

from ptconnect.core.records import LoggedExerciseDraft, LoggedSetDraft
from ptconnect.extensions import ma


class LoggedSetSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    weight = fields.Float(allow_none=True, load_default=None, validate=validate.Range(min=0))
    reps = fields.Int(allow_none=True, load_default=None, validate=validate.Range(min=0))
    rpe = fields.Float(allow_none=True, load_default=None, validate=validate.Range(min=0, max=10))
    rest = fields.Int(allow_none=True, load_default=None, validate=validate.Range(min=0))

    @post_load
    def make_set(self, data, **kwargs):
        return LoggedSetDraft(
            weight=data["weight"],
            reps=data["reps"],
            rpe=data["rpe"],
            rest_seconds=data["rest"],
        )


class LoggedExerciseSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    routine_exercise_id = fields.Int(data_key="routineExerciseId", allow_none=True, load_default=None)
    exercise_id = fields.Int(data_key="exerciseId", allow_none=True, load_default=None)
    name = fields.Str(allow_none=True, load_default=None)
    sets = fields.List(fields.Nested(LoggedSetSchema), load_default=list)

    @post_load
    def make_exercise(self, data, **kwargs):
        return LoggedExerciseDraft(
            routine_exercise_id=data["routine_exercise_id"],
            exercise_id=data["exercise_id"],
            name=data["name"],
            sets=tuple(data["sets"]),
        )


class LogWorkoutSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    routine_id = fields.Int(data_key="routineId", required=True)
    date = fields.DateTime(allow_none=True, load_default=None)
    exercises = fields.List(fields.Nested(LoggedExerciseSchema), load_default=list)


log_workout_schema = LogWorkoutSchema()
