from sqlalchemy.orm import validates

from ptconnect.extensions import db
from ptconnect.utils.timeutils import utcnow


def catalog_name_key(name):
    """Case-folded, trimmed form of a catalog name; the uniqueness key per PT."""
    return (name or "").strip().casefold()


class ExerciseCatalogEntry(db.Model):
    __tablename__ = "exercises_catalog"

    id = db.Column(db.Integer, primary_key=True)
    pt_id = db.Column(db.Integer, db.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    name = db.Column(db.String(150), nullable=False)
    name_key = db.Column(db.String(150), nullable=False)

    primary_muscle_group = db.Column(db.String(50))
    secondary_muscle_group = db.Column(db.String(50))
    equipment_required = db.Column(db.String(100))
    default_rest_seconds = db.Column(
        db.Integer,
        db.CheckConstraint("default_rest_seconds IS NULL OR default_rest_seconds >= 0", name="ck_catalog_rest"),
    )
    instruction_notes = db.Column(db.Text)
    video_link = db.Column(db.String(255))

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    pt = db.relationship("Profile", foreign_keys=[pt_id])

    # The only authority on catalog-name uniqueness; resolution relies on it.
    __table_args__ = (
        db.UniqueConstraint("pt_id", "name_key", name="uq_exercises_catalog_pt_name_key"),
    )

    @validates("name")
    def _sync_name_key(self, key, value):
        self.name_key = catalog_name_key(value)
        return value

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "primaryMuscleGroup": self.primary_muscle_group,
            "secondaryMuscleGroup": self.secondary_muscle_group,
            "equipmentRequired": self.equipment_required,
            "defaultRestSeconds": self.default_rest_seconds,
            "instructionNotes": self.instruction_notes,
            "videoLink": self.video_link,
        }

    def __repr__(self):
        return f"<ExerciseCatalogEntry {self.name}>"
