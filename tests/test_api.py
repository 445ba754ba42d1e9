"""HTTP surface: auth, role checks, payload validation and response shapes."""

from ptconnect.extensions import db
from ptconnect.models import Notification, Profile, PTClient, Routine


def _create_routine(client, headers, client_id, **overrides):
    payload = {
        "clientId": client_id,
        "name": "Upper A",
        "exercises": [
            {"name": "Bench Press", "sets": [{"reps": "8-10", "rest": "90", "weight": 60}, {"reps": 8}]},
            {"name": "Row", "repsMin": 10, "repsMax": 12, "prescribedSets": 3},
        ],
    }
    payload.update(overrides)
    return client.post("/coach/api/routines", json=payload, headers=headers)


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

def test_login_returns_token_and_profile(client, pt):
    resp = client.post("/api/auth/login", json={"email": "PAT@example.com", "password": "Secret123!"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["access_token"]
    assert body["user"]["role"] == "pt"

    me = client.get("/api/auth/user", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.get_json()["email"] == "pat@example.com"
    assert "password_hash" not in me.get_json()


def test_login_rejects_bad_password(client, pt):
    resp = client.post("/api/auth/login", json={"email": "pat@example.com", "password": "nope"})
    assert resp.status_code == 401
    assert resp.get_json() == {"msg": "Invalid email or password"}


def test_login_validates_payload(client):
    resp = client.post("/api/auth/login", json={"email": "not-an-email"})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["msg"] == "Invalid request"
    assert "email" in body["errors"] and "password" in body["errors"]


def test_missing_token_is_401(client):
    assert client.get("/coach/api/dashboard").status_code == 401


def test_wrong_role_is_403(client, client_headers, pt_headers):
    assert client.get("/coach/api/dashboard", headers=client_headers).status_code == 403
    assert client.get("/client/api/dashboard", headers=pt_headers).status_code == 403


# ---------------------------------------------------------------------------
# Routines
# ---------------------------------------------------------------------------

def test_create_and_update_routine(client, pt_headers, trainee):
    resp = _create_routine(client, pt_headers, trainee.id)
    assert resp.status_code == 201
    body = resp.get_json()
    routine = body["routine"]
    assert routine["name"] == "Upper A"
    bench, row = routine["exercises"]
    assert [s["reps"] for s in bench["sets"]] == ["8-10", "8"]
    assert bench["sets"][0]["rest"] == "90"
    assert [s["reps"] for s in row["sets"]] == ["10-12"] * 3

    update = client.put(
        f"/coach/api/routines/{body['routineId']}",
        json={"clientId": trainee.id, "name": "Upper B", "exercises": [{"id": row["id"], "name": "Row"}]},
        headers=pt_headers,
    )
    assert update.status_code == 200
    updated = update.get_json()["routine"]
    assert updated["name"] == "Upper B"
    assert [e["id"] for e in updated["exercises"]] == [row["id"]]


def test_create_routine_rejects_blank_exercise_name(client, pt_headers, trainee):
    resp = _create_routine(client, pt_headers, trainee.id, exercises=[{"name": "  "}])
    assert resp.status_code == 400
    assert Routine.query.count() == 0


def test_create_routine_rejects_overflowing_rest(client, pt_headers, trainee):
    resp = _create_routine(client, pt_headers, trainee.id, exercises=[
        {"name": "Bench Press", "sets": [{"reps": "5", "rest": "1e999"}]},
    ])
    assert resp.status_code == 400
    assert Routine.query.count() == 0


def test_create_routine_for_unassigned_client_is_404(client, trainee, other_pt_headers):
    resp = _create_routine(client, other_pt_headers, trainee.id)
    assert resp.status_code == 404
    assert resp.get_json() == {"msg": "Client not found"}


def test_deactivate_routine(client, pt_headers, client_headers, trainee):
    routine_id = _create_routine(client, pt_headers, trainee.id).get_json()["routineId"]
    resp = client.post(f"/coach/api/routines/{routine_id}/deactivate", headers=pt_headers)
    assert resp.status_code == 200

    dashboard = client.get("/client/api/dashboard", headers=client_headers).get_json()
    assert dashboard["routines"] == []
    assert client.get(f"/client/api/session/{routine_id}", headers=client_headers).status_code == 404


# ---------------------------------------------------------------------------
# Client workout flow
# ---------------------------------------------------------------------------

def test_log_workout_and_session_detail(client, pt, pt_headers, client_headers, trainee):
    routine = _create_routine(client, pt_headers, trainee.id).get_json()["routine"]
    bench = routine["exercises"][0]

    resp = client.post("/client/api/log-workout", json={
        "routineId": routine["id"],
        "date": "2026-10-14T08:30:00Z",
        "exercises": [
            {"routineExerciseId": bench["id"], "sets": [{"weight": 60, "reps": 8, "rpe": 7.5, "rest": 90}]},
            {"name": "Curl", "sets": [{"reps": 12}]},
        ],
    }, headers=client_headers)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["success"] is True
    assert body["skipped"] == ["Curl"]
    assert body["streak"]["totalWorkouts"] == 1

    detail = client.get(f"/client/api/session/{routine['id']}", headers=client_headers).get_json()
    assert detail["lastWorkout"]["performedAt"] == "2026-10-14T08:30:00Z"
    assert detail["lastWorkout"]["exercises"][0]["sets"][0]["weight"] == 60.0

    notes = client.get("/coach/api/notifications", headers=pt_headers).get_json()
    assert [n["type"] for n in notes] == ["client_logged_workout"]
    assert notes[0]["clientName"] == "Casey Client"


def test_log_workout_rejects_bad_rpe(client, pt_headers, client_headers, trainee):
    routine_id = _create_routine(client, pt_headers, trainee.id).get_json()["routineId"]
    resp = client.post("/client/api/log-workout", json={
        "routineId": routine_id,
        "exercises": [{"name": "Row", "sets": [{"rpe": 14}]}],
    }, headers=client_headers)
    assert resp.status_code == 400


# ---------------------------------------------------------------------------
# Roster, calendar, health, catalog
# ---------------------------------------------------------------------------

def test_create_client_assigns_and_notifies(client, pt, pt_headers):
    resp = client.post("/coach/api/clients", json={"name": "Jo Newcomer", "email": "Jo@Example.com"}, headers=pt_headers)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["temporaryPassword"]
    new_client = db.session.get(Profile, body["client"]["id"])
    assert new_client.email == "jo@example.com"
    assert new_client.first_name == "Jo"
    assert new_client.training_frequency_goal == 3
    assert PTClient.active_for(pt.id, new_client.id) is not None
    assert Notification.query.filter_by(user_id=pt.id, type="client_created").count() == 1

    dup = client.post("/coach/api/clients", json={"name": "Jo Again", "email": "jo@example.com"}, headers=pt_headers)
    assert dup.status_code == 400


def test_update_client(client, pt_headers, trainee):
    resp = client.put("/coach/api/clients", json={"clientId": trainee.id, "name": "Casey Renamed"}, headers=pt_headers)
    assert resp.status_code == 200
    assert resp.get_json()["client"]["name"] == "Casey Renamed"


def test_calendar_create_and_list(client, pt_headers, trainee):
    resp = client.post("/coach/api/calendar", json={
        "title": "1:1",
        "type": "session",
        "startDate": "2026-10-20T09:00:00Z",
        "endDate": "2026-10-20T10:00:00Z",
        "clientId": trainee.id,
    }, headers=pt_headers)
    assert resp.status_code == 201
    assert resp.get_json()["startDate"] == "2026-10-20T09:00:00Z"

    events = client.get("/coach/api/calendar", headers=pt_headers).get_json()
    assert [e["title"] for e in events] == ["1:1"]


def test_calendar_rejects_end_before_start(client, pt_headers):
    resp = client.post("/coach/api/calendar", json={
        "title": "Break",
        "type": "break",
        "startDate": "2026-10-20T10:00:00Z",
        "endDate": "2026-10-20T09:00:00Z",
    }, headers=pt_headers)
    assert resp.status_code == 400


def test_health_logs_endpoints(client, pt_headers, trainee):
    resp = client.post("/coach/api/health-logs", json={
        "clientId": trainee.id, "injuryTitle": "Tight hamstring", "status": "LINGERING",
    }, headers=pt_headers)
    assert resp.status_code == 201
    assert resp.get_json()["status"] == "LINGERING"

    bad = client.post("/coach/api/health-logs", json={
        "clientId": trainee.id, "injuryTitle": "x", "status": "FINE",
    }, headers=pt_headers)
    assert bad.status_code == 400

    logs = client.get(f"/coach/api/health-logs?clientId={trainee.id}", headers=pt_headers).get_json()
    assert [log["injury_title"] for log in logs] == ["Tight hamstring"]

    dashboard = client.get("/coach/api/dashboard", headers=pt_headers).get_json()
    assert dashboard["clients"][0]["activeHealthIssue"]["injuryTitle"] == "Tight hamstring"


def test_exercise_search(client, pt_headers, trainee):
    _create_routine(client, pt_headers, trainee.id)
    results = client.get("/coach/api/exercises?q=row", headers=pt_headers).get_json()
    assert [r["name"] for r in results] == ["Row"]


def test_notifications_read_flow(client, pt, pt_headers):
    for message in ("one", "two"):
        db.session.add(Notification(user_id=pt.id, type="info", message=message))
    db.session.commit()

    notes = client.get("/coach/api/notifications", headers=pt_headers).get_json()
    assert len(notes) == 2 and not any(n["isRead"] for n in notes)

    resp = client.post(f"/coach/api/notifications/{notes[0]['id']}/read", headers=pt_headers)
    assert resp.status_code == 200
    resp = client.post("/coach/api/notifications/read-all", headers=pt_headers)
    assert resp.get_json()["updated"] == 1

    assert client.post("/coach/api/notifications/9999/read", headers=pt_headers).status_code == 404
