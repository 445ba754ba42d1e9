from flask import jsonify, request

from ptconnect.schemas.health import health_log_input_schema, health_log_schema, health_logs_schema
from ptconnect.services.health import create_health_log, list_health_logs
from ptconnect.utils.decorators import role_required

from . import coach_bp


@coach_bp.route("/api/health-logs", methods=["GET"])
@role_required("pt")
def health_logs(current_profile):
    client_id = request.args.get("clientId", type=int)
    if client_id is None:
        return jsonify({"msg": "clientId is required"}), 400
    logs = list_health_logs(current_profile.id, client_id)
    return jsonify(health_logs_schema.dump(logs)), 200


@coach_bp.route("/api/health-logs", methods=["POST"])
@role_required("pt")
def add_health_log(current_profile):
    data = health_log_input_schema.load(request.get_json() or {})
    log = create_health_log(
        current_profile.id,
        data["client_id"],
        data["injury_title"],
        data["status"],
        details=data["details"],
        severity=data["severity"],
    )
    return jsonify(health_log_schema.dump(log)), 201
