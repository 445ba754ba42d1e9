# ================================
# Notification Model
# ================================

from ptconnect.extensions import db
from ptconnect.utils.timeutils import utcnow, isoformat_utc


class Notification(db.Model):
    __tablename__ = "notifications"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    type = db.Column(db.String(50), nullable=False)
    title = db.Column(db.String(200), nullable=True)
    message = db.Column(db.Text, nullable=False)
    client_id = db.Column(db.Integer, db.ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    calendar_event_id = db.Column(db.Integer, db.ForeignKey("pt_calendar_events.id", ondelete="SET NULL"), nullable=True)
    extra_data = db.Column(db.JSON, default=dict)
    is_read = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    client = db.relationship("Profile", foreign_keys=[client_id])

    __table_args__ = (
        db.Index("idx_notifications_user_read_created", "user_id", "is_read", "created_at"),
    )

    def to_dict(self, include_client=False):
        data = {
            'id': self.id,
            'type': self.type,
            'title': self.title,
            'message': self.message,
            'metadata': self.extra_data or {},
            'isRead': self.is_read,
            'timestamp': isoformat_utc(self.created_at),
        }
        if include_client:
            data['clientId'] = self.client_id
            data['clientName'] = self.client.full_name if self.client else None
        return data
