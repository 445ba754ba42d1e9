from datetime import timedelta

from ptconnect.core.records import HealthAlert
from ptconnect.utils.timeutils import to_utc_naive

ALERT_WINDOW = timedelta(minutes=15)
SESSION_EVENT_TYPE = "session"
FALLBACK_CLIENT_NAME = "Client"


def active_issue(logs):
    """Most recently logged ACUTE/LINGERING entry, or None."""
    active = [log for log in logs if log.is_active]
    if not active:
        return None
    return max(active, key=lambda log: to_utc_naive(log.logged_at))


def most_recent_log(logs):
    if not logs:
        return None
    return max(logs, key=lambda log: to_utc_naive(log.logged_at))


def correlate_health_alerts(events, health_logs_by_client, now, client_names=None, window=ALERT_WINDOW):
    """
    One alert per upcoming session whose client has an active health issue.

    A session is upcoming when it starts within ``[now, now + window]``.
    """
    now = to_utc_naive(now)
    horizon = now + window
    client_names = client_names or {}

    alerts = []
    for event in sorted(events, key=lambda e: to_utc_naive(e.start_at)):
        if event.event_type != SESSION_EVENT_TYPE or event.client_id is None:
            continue
        if not now <= to_utc_naive(event.start_at) <= horizon:
            continue

        issue = active_issue(health_logs_by_client.get(event.client_id, ()))
        if issue is None:
            continue

        alerts.append(HealthAlert(
            event_id=event.id,
            client_id=event.client_id,
            client_name=client_names.get(event.client_id) or FALLBACK_CLIENT_NAME,
            session_start=event.start_at,
            session_end=event.end_at,
            injury_title=issue.injury_title,
            status=issue.status,
        ))
    return alerts
