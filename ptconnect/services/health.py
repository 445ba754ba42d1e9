import logging
from datetime import timedelta

from flask import current_app

from ptconnect.core.health_alerts import correlate_health_alerts
from ptconnect.core.records import CalendarEventRow, HealthLogRow
from ptconnect.errors import NotFoundError, ValidationError
from ptconnect.extensions import db
from ptconnect.models import CalendarEvent, ClientHealthLog, Notification, Profile, PTClient
from ptconnect.models.health_log import HEALTH_STATUSES
from ptconnect.services import store_guard
from ptconnect.services.notifications import record_notification
from ptconnect.utils.timeutils import utcnow

logger = logging.getLogger(__name__)

HEALTH_ALERT_NOTIFICATION = "health_alert"


def _require_assignment(pt_id, client_id):
    assignment = PTClient.query.filter_by(pt_id=pt_id, client_id=client_id).first()
    if assignment is None:
        raise NotFoundError("Client not found")
    return assignment


def list_health_logs(pt_id, client_id):
    with store_guard("fetch health logs"):
        _require_assignment(pt_id, client_id)
        return (
            ClientHealthLog.query
            .filter_by(client_id=client_id)
            .order_by(ClientHealthLog.logged_at.desc(), ClientHealthLog.id.desc())
            .all()
        )


def create_health_log(pt_id, client_id, injury_title, status, details=None, severity=None):
    """Append a health fact. A RESOLVED entry closes the issue; history stays."""
    if status not in HEALTH_STATUSES:
        raise ValidationError("Invalid status")
    if not (injury_title or "").strip():
        raise ValidationError("injuryTitle is required")

    with store_guard("create health log"):
        _require_assignment(pt_id, client_id)
        now = utcnow()
        log = ClientHealthLog(
            client_id=client_id,
            injury_title=injury_title.strip(),
            details=details,
            status=status,
            severity=severity,
            created_by_pt=pt_id,
            logged_at=now,
            resolved_at=now if status == "RESOLVED" else None,
        )
        db.session.add(log)
        db.session.commit()
        logger.info(f"PT {pt_id} logged {status} health issue {log.id} for client {client_id}")
        return log


def health_logs_by_client(client_ids):
    """``{client_id: [HealthLogRow, ...]}``, newest first per client."""
    grouped = {client_id: [] for client_id in client_ids}
    if not client_ids:
        return grouped

    with store_guard("fetch health logs"):
        logs = (
            ClientHealthLog.query
            .filter(ClientHealthLog.client_id.in_(client_ids))
            .order_by(ClientHealthLog.logged_at.desc(), ClientHealthLog.id.desc())
            .all()
        )
    for log in logs:
        grouped[log.client_id].append(HealthLogRow(
            id=log.id,
            client_id=log.client_id,
            injury_title=log.injury_title,
            status=log.status,
            logged_at=log.logged_at,
            details=log.details,
        ))
    return grouped


def alert_window():
    return timedelta(minutes=current_app.config.get("HEALTH_ALERT_WINDOW_MINUTES", 15))


def upcoming_session_rows(pt_id, now, window):
    with store_guard("fetch upcoming sessions"):
        events = (
            CalendarEvent.query
            .filter(
                CalendarEvent.pt_id == pt_id,
                CalendarEvent.event_type == "session",
                CalendarEvent.start_at >= now,
                CalendarEvent.start_at <= now + window,
            )
            .all()
        )
    return [
        CalendarEventRow(
            id=e.id,
            client_id=e.client_id,
            event_type=e.event_type,
            start_at=e.start_at,
            end_at=e.end_at,
            title=e.title,
        )
        for e in events
    ]


def fetch_health_alerts(pt_id, client_names, logs_by_client, now=None):
    now = now or utcnow()
    window = alert_window()
    events = upcoming_session_rows(pt_id, now, window)
    return correlate_health_alerts(events, logs_by_client, now, client_names=client_names, window=window)


def active_clients(pt_id):
    with store_guard("fetch clients"):
        return (
            Profile.query
            .join(PTClient, PTClient.client_id == Profile.id)
            .filter(PTClient.pt_id == pt_id, PTClient.status == "active")
            .order_by(Profile.full_name, Profile.id)
            .all()
        )


def sweep_health_alerts(now=None):
    """
    Record one ``health_alert`` notification per PT and upcoming session.
    Sessions already notified are skipped, so overlapping sweeps are harmless.
    """
    now = now or utcnow()
    with store_guard("sweep health alerts"):
        pt_ids = [
            row.pt_id for row in
            db.session.query(PTClient.pt_id).filter(PTClient.status == "active").distinct().all()
        ]

    recorded = 0
    for pt_id in pt_ids:
        clients = active_clients(pt_id)
        names = {c.id: c.full_name for c in clients}
        alerts = fetch_health_alerts(pt_id, names, health_logs_by_client(list(names)), now=now)
        for alert in alerts:
            with store_guard("check alert notifications"):
                already = Notification.query.filter_by(
                    user_id=pt_id,
                    type=HEALTH_ALERT_NOTIFICATION,
                    calendar_event_id=alert.event_id,
                ).first()
            if already is not None:
                continue

            notification = record_notification(
                pt_id,
                HEALTH_ALERT_NOTIFICATION,
                f"{alert.client_name} has a session soon: {alert.injury_title} ({alert.status})",
                title="Upcoming session health alert",
                client_id=alert.client_id,
                calendar_event_id=alert.event_id,
                metadata=alert.to_dict(),
            )
            if notification is not None:
                recorded += 1

    if recorded:
        logger.info(f"Health alert sweep recorded {recorded} notifications")
    return recorded
