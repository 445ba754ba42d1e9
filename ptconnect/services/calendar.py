from ptconnect.errors import NotFoundError, ValidationError
from ptconnect.extensions import db
from ptconnect.models import CalendarEvent, PTClient
from ptconnect.services import store_guard
from ptconnect.utils.timeutils import to_utc_naive


def list_events(pt_id):
    with store_guard("load calendar"):
        return (
            CalendarEvent.query
            .filter_by(pt_id=pt_id)
            .order_by(CalendarEvent.start_at, CalendarEvent.id)
            .all()
        )


def create_event(pt_id, title, event_type, start_at, end_at, client_id=None,
                 recurrence_rule=None, notes=None, location=None, is_all_day=False):
    start_at = to_utc_naive(start_at)
    end_at = to_utc_naive(end_at)
    if end_at < start_at:
        raise ValidationError("endDate must not be before startDate")

    with store_guard("create event"):
        if client_id is not None and PTClient.active_for(pt_id, client_id) is None:
            raise NotFoundError("Client not found")

        event = CalendarEvent(
            pt_id=pt_id,
            client_id=client_id,
            title=title,
            event_type=event_type,
            start_at=start_at,
            end_at=end_at,
            recurrence_rrule=recurrence_rule,
            notes=notes,
            location=location,
            is_all_day=is_all_day,
        )
        db.session.add(event)
        db.session.commit()
        return event
