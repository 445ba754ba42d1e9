from datetime import datetime, timedelta, timezone

from ptconnect.core.health_alerts import active_issue, correlate_health_alerts, most_recent_log
from ptconnect.core.records import CalendarEventRow, HealthLogRow

NOW = datetime(2026, 10, 14, 12, 0, 0)


def _event(id, client_id=2, minutes=5, event_type="session"):
    start = NOW + timedelta(minutes=minutes)
    return CalendarEventRow(
        id=id,
        client_id=client_id,
        event_type=event_type,
        start_at=start,
        end_at=start + timedelta(hours=1),
    )


def _log(id, status, days_ago=1, client_id=2, title="Knee pain"):
    return HealthLogRow(
        id=id,
        client_id=client_id,
        injury_title=title,
        status=status,
        logged_at=NOW - timedelta(days=days_ago),
    )


def test_active_issue_is_latest_active_log():
    logs = [
        _log(1, "ACUTE", days_ago=10, title="Shoulder"),
        _log(2, "LINGERING", days_ago=3, title="Knee"),
        _log(3, "RESOLVED", days_ago=1, title="Back"),
    ]
    assert active_issue(logs).id == 2
    assert most_recent_log(logs).id == 3


def test_no_active_issue_when_all_resolved():
    assert active_issue([_log(1, "RESOLVED")]) is None
    assert active_issue([]) is None
    assert most_recent_log([]) is None


def test_alert_for_upcoming_session_with_active_issue():
    alerts = correlate_health_alerts(
        [_event(10)],
        {2: [_log(1, "ACUTE")]},
        NOW,
        client_names={2: "Casey Client"},
    )
    assert len(alerts) == 1
    alert = alerts[0]
    assert alert.event_id == 10
    assert alert.client_name == "Casey Client"
    assert alert.injury_title == "Knee pain"
    assert alert.status == "ACUTE"
    assert alert.to_dict()["sessionStart"] == "2026-10-14T12:05:00Z"


def test_window_bounds_are_inclusive():
    events = [_event(1, minutes=0), _event(2, minutes=15), _event(3, minutes=16), _event(4, minutes=-1)]
    alerts = correlate_health_alerts(events, {2: [_log(1, "LINGERING")]}, NOW)
    assert [a.event_id for a in alerts] == [1, 2]


def test_non_session_and_unlinked_events_are_ignored():
    events = [_event(1, event_type="break"), _event(2, client_id=None), _event(3, event_type="studio")]
    assert correlate_health_alerts(events, {2: [_log(1, "ACUTE")]}, NOW) == []


def test_client_without_active_issue_gets_no_alert():
    alerts = correlate_health_alerts([_event(1), _event(2, client_id=3)], {2: [_log(1, "RESOLVED")]}, NOW)
    assert alerts == []


def test_missing_name_falls_back():
    alerts = correlate_health_alerts([_event(1)], {2: [_log(1, "ACUTE")]}, NOW)
    assert alerts[0].client_name == "Client"


def test_alerts_sorted_by_start_and_aware_now_accepted():
    aware_now = NOW.replace(tzinfo=timezone.utc)
    alerts = correlate_health_alerts(
        [_event(1, minutes=10), _event(2, minutes=2)],
        {2: [_log(1, "ACUTE")]},
        aware_now,
    )
    assert [a.event_id for a in alerts] == [2, 1]


def test_custom_window():
    alerts = correlate_health_alerts(
        [_event(1, minutes=25)],
        {2: [_log(1, "ACUTE")]},
        NOW,
        window=timedelta(minutes=30),
    )
    assert len(alerts) == 1
