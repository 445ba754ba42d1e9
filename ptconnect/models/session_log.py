from ptconnect.extensions import db
from ptconnect.utils.timeutils import utcnow


class SessionLog(db.Model):
    __tablename__ = "session_logs"

    id = db.Column(db.Integer, primary_key=True)
    routine_id = db.Column(db.Integer, db.ForeignKey("routines.id", ondelete="SET NULL"), nullable=True)
    pt_id = db.Column(db.Integer, db.ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    client_id = db.Column(db.Integer, db.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    performed_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    duration_seconds = db.Column(db.Integer)
    client_notes = db.Column(db.Text)
    perceived_effort = db.Column(db.Float)
    created_at = db.Column(db.DateTime, default=utcnow)

    sets = db.relationship(
        "SessionLogSet",
        back_populates="session_log",
        order_by="SessionLogSet.set_number",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        db.Index("idx_session_logs_client_performed", "client_id", "performed_at"),
        db.Index("idx_session_logs_routine_performed", "routine_id", "performed_at"),
    )


class SessionLogSet(db.Model):
    __tablename__ = "session_log_sets"

    id = db.Column(db.Integer, primary_key=True)
    session_log_id = db.Column(db.Integer, db.ForeignKey("session_logs.id", ondelete="CASCADE"), nullable=False)
    exercise_id = db.Column(db.Integer, db.ForeignKey("exercises_catalog.id", ondelete="RESTRICT"), nullable=False)
    set_number = db.Column(db.SmallInteger, nullable=False)
    logged_weight = db.Column(db.Float)
    logged_reps = db.Column(db.SmallInteger)
    logged_rpe = db.Column(db.Float)
    actual_rest_seconds = db.Column(db.Integer)
    is_personal_best = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    session_log = db.relationship("SessionLog", back_populates="sets")

    __table_args__ = (
        db.CheckConstraint("set_number > 0", name="ck_session_sets_number"),
        db.Index("idx_session_log_sets_session", "session_log_id", "set_number"),
    )
