import logging

from sqlalchemy.exc import SQLAlchemyError

from ptconnect.errors import NotFoundError
from ptconnect.extensions import db
from ptconnect.models import Notification
from ptconnect.services import store_guard

logger = logging.getLogger(__name__)


def record_notification(user_id, type, message, title=None, client_id=None,
                        calendar_event_id=None, metadata=None):
    """
    Fire-and-forget: a failure is logged and swallowed, never raised.
    Must be called after the caller's own writes are committed.
    """
    notification = Notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        client_id=client_id,
        calendar_event_id=calendar_event_id,
        extra_data=metadata or {},
    )
    try:
        db.session.add(notification)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to create notification {type!r} for user {user_id}: {e}")
        return None
    return notification


def list_notifications(user_id, include_client=False):
    with store_guard("load notifications"):
        rows = (
            Notification.query
            .filter_by(user_id=user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .all()
        )
        return [row.to_dict(include_client=include_client) for row in rows]


def mark_read(user_id, notification_id):
    with store_guard("update notification"):
        updated = (
            Notification.query
            .filter_by(id=notification_id, user_id=user_id)
            .update({"is_read": True})
        )
        db.session.commit()
    if not updated:
        raise NotFoundError("Notification not found")


def mark_all_read(user_id):
    with store_guard("update notifications"):
        updated = (
            Notification.query
            .filter_by(user_id=user_id, is_read=False)
            .update({"is_read": True})
        )
        db.session.commit()
    return updated
