import logging

from flask import current_app
from sqlalchemy.orm import selectinload

from ptconnect.core.records import ExerciseRow, RoutineRows, SetRow
from ptconnect.core.routine_view import RoutineViewPolicy, build_routine_view
from ptconnect.errors import NotFoundError
from ptconnect.extensions import db
from ptconnect.models import PTClient, Routine, RoutineExercise, RoutineExerciseSet
from ptconnect.models.routine import DEFAULT_PRESCRIBED_SETS
from ptconnect.services import store_guard
from ptconnect.services.catalog import resolve_catalog_entry

logger = logging.getLogger(__name__)


def view_policy():
    return RoutineViewPolicy.from_config(current_app.config)


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def _set_rows(exercise):
    rows = []
    for s in exercise.sets:
        try:
            rows.append(SetRow(
                set_number=s.set_number,
                target_reps=s.target_reps,
                target_rep_range=s.target_rep_range,
                target_weight=s.target_weight,
                target_rest_seconds=s.target_rest_seconds,
            ))
        except ValueError as e:
            logger.warning(f"Skipping malformed set {s.id} of routine exercise {exercise.id}: {e}")
    return tuple(rows)


def routine_rows(routine):
    """Snapshot a loaded ``Routine`` into plain rows, dropping malformed children."""
    exercises = []
    for ex in routine.exercises:
        catalog = ex.exercise
        try:
            exercises.append(ExerciseRow(
                id=ex.id,
                exercise_id=ex.exercise_id,
                position=ex.position,
                name=catalog.name if catalog else None,
                notes=ex.notes,
                catalog_notes=catalog.instruction_notes if catalog else None,
                default_rest_seconds=catalog.default_rest_seconds if catalog else None,
                prescribed_sets=ex.prescribed_sets,
                reps_min=ex.prescribed_reps_min,
                reps_max=ex.prescribed_reps_max,
                weight=ex.prescribed_weight,
                rest_seconds=ex.prescribed_rest_seconds,
                sets=_set_rows(ex),
            ))
        except ValueError as e:
            logger.warning(f"Skipping malformed exercise {ex.id} of routine {routine.id}: {e}")

    return RoutineRows(
        id=routine.id,
        name=routine.routine_name,
        pt_id=routine.pt_id,
        client_id=routine.client_id,
        exercises=tuple(exercises),
    )


def _routine_query():
    return Routine.query.options(
        selectinload(Routine.exercises).selectinload(RoutineExercise.exercise),
        selectinload(Routine.exercises).selectinload(RoutineExercise.sets),
    )


def fetch_client_routines(client_id):
    """Active routines of a client as views, oldest first."""
    with store_guard("fetch routines"):
        routines = (
            _routine_query()
            .filter(Routine.client_id == client_id, Routine.is_active.is_(True))
            .order_by(Routine.created_at, Routine.id)
            .all()
        )
        policy = view_policy()
        return [build_routine_view(routine_rows(r), policy) for r in routines]


def fetch_routine_detail(routine_id, client_id):
    with store_guard("fetch routine"):
        routine = (
            _routine_query()
            .filter(
                Routine.id == routine_id,
                Routine.client_id == client_id,
                Routine.is_active.is_(True),
            )
            .first()
        )
        if routine is None:
            return None
        return build_routine_view(routine_rows(routine), view_policy())


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

def _apply_sets(row, set_drafts):
    """Update sets in place by set number; extras are dropped, new ones added."""
    existing = {s.set_number: s for s in row.sets}
    wanted = []
    for draft in set_drafts:
        target = existing.pop(draft.set_number, None) or RoutineExerciseSet(set_number=draft.set_number)
        target.target_reps = draft.reps
        target.target_rep_range = draft.rep_range
        target.target_weight = draft.weight
        target.target_rest_seconds = draft.rest_seconds
        wanted.append(target)
    row.sets = wanted


def _match_existing(unmatched, draft, catalog_id):
    if draft.routine_exercise_id is not None:
        for row in unmatched:
            if row.id == draft.routine_exercise_id:
                return row
    for row in unmatched:
        if row.exercise_id == catalog_id:
            return row
    return None


def _apply_exercises(routine, exercise_drafts, catalog_ids):
    """
    Diff the submitted exercise list against the stored one.

    Matched rows keep their ids; unmatched stored rows are deleted with their
    sets. Positions follow submission order.
    """
    unmatched = list(routine.exercises)
    rows = []
    for draft, catalog_id in zip(exercise_drafts, catalog_ids):
        row = _match_existing(unmatched, draft, catalog_id)
        if row is None:
            row = RoutineExercise()
        else:
            unmatched.remove(row)

        row.exercise_id = catalog_id
        row.position = draft.position
        row.notes = draft.notes
        row.prescribed_sets = draft.prescribed_sets or len(draft.sets) or DEFAULT_PRESCRIBED_SETS
        row.prescribed_reps_min = draft.reps_min
        row.prescribed_reps_max = draft.reps_max
        row.prescribed_weight = draft.weight
        row.prescribed_rest_seconds = draft.rest_seconds
        _apply_sets(row, draft.sets)
        rows.append(row)

    if unmatched:
        logger.debug(f"Removing {len(unmatched)} exercises from routine {routine.id}")
    routine.exercises = rows


def upsert_routine(draft):
    """
    Create (no ``routine_id``) or update a routine with its whole exercise/set
    graph, returning the routine id.

    Ownership is checked and catalog entries are resolved before the routine
    is touched; the routine row and its children then commit together.
    """
    with store_guard("save routine"):
        if PTClient.active_for(draft.pt_id, draft.client_id) is None:
            raise NotFoundError("Client not found")

        if draft.is_update:
            exists = Routine.query.filter_by(id=draft.routine_id, pt_id=draft.pt_id).first()
            if exists is None:
                raise NotFoundError("Routine not found")

    catalog_ids = [
        resolve_catalog_entry(
            draft.pt_id,
            exercise.name,
            catalog_id=exercise.catalog_id,
            notes=exercise.notes,
            default_rest_seconds=exercise.default_rest_seconds,
        )
        for exercise in draft.exercises
    ]

    with store_guard("save routine"):
        if draft.is_update:
            routine = db.session.get(Routine, draft.routine_id)
            if routine is None or routine.pt_id != draft.pt_id:
                raise NotFoundError("Routine not found")
        else:
            routine = Routine(pt_id=draft.pt_id)
            db.session.add(routine)

        routine.client_id = draft.client_id
        routine.routine_name = draft.name.strip()
        if draft.description is not None:
            routine.description = draft.description
        if draft.goal_focus is not None:
            routine.goal_focus = draft.goal_focus

        _apply_exercises(routine, draft.exercises, catalog_ids)
        db.session.commit()

        action = "Updated" if draft.is_update else "Created"
        logger.info(f"{action} routine {routine.id} with {len(draft.exercises)} exercises for client {draft.client_id}")
        return routine.id


def deactivate_routine(pt_id, routine_id):
    with store_guard("deactivate routine"):
        routine = Routine.query.filter_by(id=routine_id, pt_id=pt_id).first()
        if routine is None:
            raise NotFoundError("Routine not found")
        routine.is_active = False
        db.session.commit()
        return routine.id


def count_active_routines(client_id):
    with store_guard("count routines"):
        return Routine.query.filter(Routine.client_id == client_id, Routine.is_active.is_(True)).count()
