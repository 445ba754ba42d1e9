from ptconnect.extensions import db
from ptconnect.utils.timeutils import utcnow


class PTClient(db.Model):
    __tablename__ = "pt_clients"

    id = db.Column(db.Integer, primary_key=True)
    pt_id = db.Column(db.Integer, db.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    client_id = db.Column(db.Integer, db.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    status = db.Column(
        db.String(20),
        db.CheckConstraint("status IN ('active','inactive','archived')", name="ck_pt_clients_status"),
        default="active",
        nullable=False,
        index=True,
    )
    assigned_at = db.Column(db.DateTime, default=utcnow)
    archived_at = db.Column(db.DateTime, nullable=True)

    pt = db.relationship("Profile", foreign_keys=[pt_id], back_populates="client_links")
    client = db.relationship("Profile", foreign_keys=[client_id], back_populates="pt_links")

    __table_args__ = (
        db.UniqueConstraint("pt_id", "client_id", name="uq_pt_clients_pair"),
    )

    @classmethod
    def active_for(cls, pt_id, client_id):
        return cls.query.filter_by(pt_id=pt_id, client_id=client_id, status="active").first()
