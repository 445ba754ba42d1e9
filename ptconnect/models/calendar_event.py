from ptconnect.extensions import db
from ptconnect.utils.timeutils import utcnow, isoformat_utc

EVENT_TYPES = ("session", "break", "studio")


class CalendarEvent(db.Model):
    __tablename__ = "pt_calendar_events"

    id = db.Column(db.Integer, primary_key=True)
    pt_id = db.Column(db.Integer, db.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    client_id = db.Column(db.Integer, db.ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    title = db.Column(db.String(150), nullable=False)
    event_type = db.Column(
        db.String(20),
        db.CheckConstraint("event_type IN ('session','break','studio')", name="ck_calendar_event_type"),
        nullable=False,
    )
    start_at = db.Column(db.DateTime, nullable=False)
    end_at = db.Column(db.DateTime, nullable=False)
    recurrence_rrule = db.Column(db.String(255))
    location = db.Column(db.String(255))
    notes = db.Column(db.Text)
    is_all_day = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    client = db.relationship("Profile", foreign_keys=[client_id])

    __table_args__ = (
        db.Index("idx_calendar_events_pt_start", "pt_id", "start_at"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "type": self.event_type,
            "startDate": isoformat_utc(self.start_at),
            "endDate": isoformat_utc(self.end_at),
            "clientId": self.client_id,
            "recurrenceRule": self.recurrence_rrule,
            "isAllDay": self.is_all_day,
            "location": self.location,
            "notes": self.notes,
        }
