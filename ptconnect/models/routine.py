from ptconnect.extensions import db
from ptconnect.utils.timeutils import utcnow

DEFAULT_PRESCRIBED_SETS = 3


class Routine(db.Model):
    __tablename__ = "routines"

    id = db.Column(db.Integer, primary_key=True)
    pt_id = db.Column(db.Integer, db.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    client_id = db.Column(db.Integer, db.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)

    routine_name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text)
    goal_focus = db.Column(db.String(100))
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    start_date = db.Column(db.Date)
    end_date = db.Column(db.Date)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    pt = db.relationship("Profile", foreign_keys=[pt_id])
    client = db.relationship("Profile", foreign_keys=[client_id])
    exercises = db.relationship(
        "RoutineExercise",
        back_populates="routine",
        order_by="RoutineExercise.position",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        db.Index("idx_routines_client_active", "client_id", "is_active"),
    )

    def __repr__(self):
        return f"<Routine {self.id} {self.routine_name}>"


class RoutineExercise(db.Model):
    __tablename__ = "routine_exercises"

    id = db.Column(db.Integer, primary_key=True)
    routine_id = db.Column(db.Integer, db.ForeignKey("routines.id", ondelete="CASCADE"), nullable=False)
    exercise_id = db.Column(db.Integer, db.ForeignKey("exercises_catalog.id", ondelete="RESTRICT"), nullable=False)
    position = db.Column(
        db.Integer,
        db.CheckConstraint("position >= 0", name="ck_routine_exercises_position"),
        nullable=False,
    )

    # Prescription fallbacks, used when a set has no explicit override
    prescribed_sets = db.Column(db.SmallInteger, default=DEFAULT_PRESCRIBED_SETS)
    prescribed_reps_min = db.Column(db.SmallInteger)
    prescribed_reps_max = db.Column(db.SmallInteger)
    prescribed_weight = db.Column(db.Float)
    prescribed_rest_seconds = db.Column(db.Integer)
    notes = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    routine = db.relationship("Routine", back_populates="exercises")
    exercise = db.relationship("ExerciseCatalogEntry")
    sets = db.relationship(
        "RoutineExerciseSet",
        back_populates="routine_exercise",
        order_by="RoutineExerciseSet.set_number",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        db.Index("idx_routine_exercises_routine_position", "routine_id", "position"),
    )


class RoutineExerciseSet(db.Model):
    __tablename__ = "routine_exercise_sets"

    id = db.Column(db.Integer, primary_key=True)
    routine_exercise_id = db.Column(db.Integer, db.ForeignKey("routine_exercises.id", ondelete="CASCADE"), nullable=False)
    set_number = db.Column(
        db.SmallInteger,
        db.CheckConstraint("set_number > 0", name="ck_routine_sets_number"),
        nullable=False,
    )
    target_reps = db.Column(db.SmallInteger)
    target_rep_range = db.Column(db.String(20))
    target_weight = db.Column(db.Float)
    target_rest_seconds = db.Column(db.Integer)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    routine_exercise = db.relationship("RoutineExercise", back_populates="sets")

    __table_args__ = (
        db.UniqueConstraint("routine_exercise_id", "set_number", name="uq_routine_sets_number"),
    )
