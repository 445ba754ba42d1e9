from werkzeug.security import generate_password_hash, check_password_hash
from ptconnect.extensions import db
from ptconnect.utils.timeutils import utcnow

PROFILES_TABLE = "profiles"


class Profile(db.Model):
    __tablename__ = PROFILES_TABLE

    id = db.Column(db.Integer, primary_key=True)
    role = db.Column(
        db.String(10),
        db.CheckConstraint("role IN ('pt','client')", name="ck_profiles_role"),
        nullable=False,
        index=True,
    )
    full_name = db.Column(db.String(150), nullable=False)
    first_name = db.Column(db.String(100))
    last_name = db.Column(db.String(100))
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=True)

    motivation_style = db.Column(db.String(50))
    training_frequency_goal = db.Column(
        db.SmallInteger,
        db.CheckConstraint(
            "training_frequency_goal IS NULL OR (training_frequency_goal > 0 AND training_frequency_goal <= 14)",
            name="ck_profiles_training_goal",
        ),
    )
    current_streak_weeks = db.Column(db.SmallInteger, default=0)
    longest_streak_weeks = db.Column(db.SmallInteger, default=0)
    prefers_metric_units = db.Column(db.Boolean, default=False)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # PT <-> client roster
    client_links = db.relationship("PTClient", foreign_keys="[PTClient.pt_id]", back_populates="pt", lazy="dynamic", cascade="all, delete-orphan")
    pt_links = db.relationship("PTClient", foreign_keys="[PTClient.client_id]", back_populates="client", lazy="dynamic", cascade="all, delete-orphan")

    # Helpers
    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def set_name(self, full_name: str):
        full_name = full_name.strip()
        first, _, rest = full_name.partition(" ")
        self.full_name = full_name
        self.first_name = first or None
        self.last_name = rest.strip() or None

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role,
            "name": self.full_name,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "training_frequency_goal": self.training_frequency_goal,
            "current_streak_weeks": self.current_streak_weeks,
            "longest_streak_weeks": self.longest_streak_weeks,
            "prefers_metric_units": self.prefers_metric_units,
        }

    def __repr__(self):
        return f"<Profile {self.id} {self.role}>"
