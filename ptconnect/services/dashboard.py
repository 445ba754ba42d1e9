"""Client and PT dashboards: the views plus their derived statistics."""
import logging

from ptconnect.core.health_alerts import active_issue, most_recent_log
from ptconnect.core.streaks import compute_streak, compute_weekly_goal
from ptconnect.models import SessionLog
from ptconnect.services import store_guard
from ptconnect.services.health import active_clients, fetch_health_alerts, health_logs_by_client
from ptconnect.services.routines import fetch_client_routines
from ptconnect.utils.timeutils import utcnow

logger = logging.getLogger(__name__)


def fetch_session_dates(client_id):
    with store_guard("fetch session logs"):
        rows = (
            SessionLog.query
            .with_entities(SessionLog.performed_at)
            .filter(SessionLog.client_id == client_id)
            .order_by(SessionLog.performed_at.desc())
            .all()
        )
    return [row.performed_at for row in rows]


def client_progress(profile, routine_count, now=None):
    """Streak and weekly goal for one client."""
    now = now or utcnow()
    dates = fetch_session_dates(profile.id)
    streak = compute_streak(dates, now=now)
    weekly_goal = compute_weekly_goal(profile.training_frequency_goal, dates, routine_count, now)
    return streak, weekly_goal


def client_dashboard(profile, now=None):
    routines = fetch_client_routines(profile.id)
    streak, weekly_goal = client_progress(profile, len(routines), now=now)
    return {
        "routines": [r.to_dict() for r in routines],
        "streak": streak.to_dict(),
        "weeklyGoal": weekly_goal.to_dict(),
    }


def pt_dashboard(pt, now=None):
    now = now or utcnow()
    clients = active_clients(pt.id)
    if not clients:
        return {"clients": [], "alerts": []}

    names = {c.id: c.full_name for c in clients}
    logs_by_client = health_logs_by_client(list(names))

    summaries = []
    for client in clients:
        dashboard = client_dashboard(client, now=now)
        logs = logs_by_client.get(client.id, [])
        issue = active_issue(logs)
        latest = most_recent_log(logs)
        summaries.append({
            "id": client.id,
            "name": client.full_name,
            "email": client.email,
            "streak": dashboard["streak"],
            "weeklyGoal": dashboard["weeklyGoal"],
            "routines": dashboard["routines"],
            "activeHealthIssue": issue.to_dict() if issue else None,
            "mostRecentHealthLog": latest.to_dict() if latest else None,
        })

    alerts = fetch_health_alerts(pt.id, names, logs_by_client, now=now)
    logger.debug(f"PT {pt.id} dashboard: {len(summaries)} clients, {len(alerts)} alerts")
    return {"clients": summaries, "alerts": [a.to_dict() for a in alerts]}
