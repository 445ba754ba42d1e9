from flask import jsonify, request

from ptconnect.schemas.routine import build_routine_draft, routine_input_schema
from ptconnect.services.routines import deactivate_routine, fetch_routine_detail, upsert_routine
from ptconnect.utils.decorators import role_required

from . import coach_bp


def _save(current_profile, routine_id=None):
    payload = routine_input_schema.load(request.get_json() or {})
    draft = build_routine_draft(payload, current_profile.id, routine_id=routine_id)
    saved_id = upsert_routine(draft)
    view = fetch_routine_detail(saved_id, draft.client_id)
    return {"success": True, "routineId": saved_id, "routine": view.to_dict() if view else None}


@coach_bp.route("/api/routines", methods=["POST"])
@role_required("pt")
def create_routine(current_profile):
    return jsonify(_save(current_profile)), 201


@coach_bp.route("/api/routines/<int:routine_id>", methods=["PUT"])
@role_required("pt")
def update_routine(routine_id, current_profile):
    return jsonify(_save(current_profile, routine_id=routine_id)), 200


@coach_bp.route("/api/routines/<int:routine_id>/deactivate", methods=["POST"])
@role_required("pt")
def deactivate(routine_id, current_profile):
    deactivate_routine(current_profile.id, routine_id)
    return jsonify({"success": True, "routineId": routine_id}), 200
