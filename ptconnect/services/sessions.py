import logging

from ptconnect.errors import NotFoundError
from ptconnect.extensions import db
from ptconnect.models import SessionLog, SessionLogSet
from ptconnect.services import store_guard
from ptconnect.services.dashboard import client_progress
from ptconnect.services.notifications import record_notification
from ptconnect.services.routines import count_active_routines, fetch_routine_detail
from ptconnect.utils.timeutils import to_utc_naive, utcnow, isoformat_utc

logger = logging.getLogger(__name__)


def fetch_last_workout(client_id, routine):
    """The client's latest logged session of ``routine``, sets grouped per exercise."""
    with store_guard("fetch last workout"):
        log = (
            SessionLog.query
            .filter_by(client_id=client_id, routine_id=routine.id)
            .order_by(SessionLog.performed_at.desc(), SessionLog.id.desc())
            .first()
        )
        if log is None:
            return None
        logged_sets = list(log.sets)

    exercises = []
    for exercise in routine.exercises:
        sets = sorted(
            (s for s in logged_sets if s.exercise_id == exercise.exercise_id),
            key=lambda s: s.set_number,
        )
        exercises.append({
            "exerciseId": exercise.exercise_id,
            "sets": [
                {
                    "setNumber": s.set_number,
                    "reps": s.logged_reps or 0,
                    "weight": float(s.logged_weight or 0),
                    "rpe": s.logged_rpe,
                    "rest": s.actual_rest_seconds,
                }
                for s in sets
            ],
        })

    return {"id": log.id, "performedAt": isoformat_utc(log.performed_at), "exercises": exercises}


def session_detail(client_id, routine_id):
    routine = fetch_routine_detail(routine_id, client_id)
    if routine is None:
        raise NotFoundError("Routine not found")
    return {"routine": routine.to_dict(), "lastWorkout": fetch_last_workout(client_id, routine)}


def log_workout(profile, routine_id, exercises, performed_at=None, now=None):
    """
    Record a performed workout of one of the client's active routines.

    The session row and all of its sets commit together. Logged exercises
    that match nothing in the routine are reported back under ``skipped``.
    """
    routine = fetch_routine_detail(routine_id, profile.id)
    if routine is None:
        raise NotFoundError("Routine not found")

    performed_at = to_utc_naive(performed_at) if performed_at else utcnow()
    log = SessionLog(
        routine_id=routine.id,
        client_id=profile.id,
        pt_id=routine.pt_id,
        performed_at=performed_at,
    )

    skipped = []
    for logged in exercises:
        match = routine.find_exercise(
            routine_exercise_id=logged.routine_exercise_id,
            exercise_id=logged.exercise_id,
            name=logged.name,
        )
        if match is None:
            skipped.append(logged.name or logged.exercise_id or logged.routine_exercise_id)
            continue

        for index, logged_set in enumerate(logged.sets):
            log.sets.append(SessionLogSet(
                exercise_id=match.exercise_id,
                set_number=index + 1,
                logged_weight=logged_set.weight,
                logged_reps=logged_set.reps,
                logged_rpe=logged_set.rpe,
                actual_rest_seconds=logged_set.rest_seconds,
            ))

    with store_guard("log workout"):
        db.session.add(log)
        db.session.commit()
        log_id = log.id

    if skipped:
        logger.warning(f"Session {log_id}: exercises not in routine {routine.id} were skipped: {skipped}")

    routine_count = count_active_routines(profile.id)
    streak, weekly_goal = client_progress(profile, routine_count, now=now)

    if routine.pt_id:
        record_notification(
            routine.pt_id,
            "client_logged_workout",
            f"{profile.full_name} completed a workout",
            title="Client workout",
            client_id=profile.id,
            metadata={"routineId": routine.id, "sessionLogId": log_id},
        )

    return {
        "success": True,
        "sessionLogId": log_id,
        "skipped": skipped,
        "streak": streak.to_dict(),
        "weeklyGoal": weekly_goal.to_dict(),
    }
