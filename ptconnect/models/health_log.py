from ptconnect.extensions import db
from ptconnect.utils.timeutils import utcnow

HEALTH_STATUSES = ("ACUTE", "LINGERING", "RESOLVED")
ACTIVE_HEALTH_STATUSES = ("ACUTE", "LINGERING")


class ClientHealthLog(db.Model):
    __tablename__ = "client_health_logs"

    id = db.Column(db.Integer, primary_key=True)
    client_id = db.Column(db.Integer, db.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    logged_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    injury_title = db.Column(db.String(150), nullable=False)
    details = db.Column(db.Text)
    status = db.Column(
        db.String(20),
        db.CheckConstraint("status IN ('ACUTE','LINGERING','RESOLVED')", name="ck_health_logs_status"),
        nullable=False,
    )
    severity = db.Column(db.String(20))
    created_by_pt = db.Column(db.Integer, db.ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    resolved_at = db.Column(db.DateTime, nullable=True)

    client = db.relationship("Profile", foreign_keys=[client_id])

    __table_args__ = (
        db.Index("idx_health_logs_client_status_logged", "client_id", "status", "logged_at"),
    )

    @property
    def is_active(self):
        return self.status in ACTIVE_HEALTH_STATUSES
