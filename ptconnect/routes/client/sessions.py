from flask import jsonify, request

from ptconnect.schemas.session import log_workout_schema
from ptconnect.services.sessions import log_workout, session_detail
from ptconnect.utils.decorators import role_required

from . import client_bp


@client_bp.route("/api/session/<int:routine_id>", methods=["GET"])
@role_required("client")
def session(routine_id, current_profile):
    return jsonify(session_detail(current_profile.id, routine_id)), 200


@client_bp.route("/api/log-workout", methods=["POST"])
@role_required("client")
def log_session(current_profile):
    data = log_workout_schema.load(request.get_json() or {})
    result = log_workout(
        current_profile,
        data["routine_id"],
        data["exercises"],
        performed_at=data["date"],
    )
    return jsonify(result), 201
