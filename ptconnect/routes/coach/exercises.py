from flask import jsonify, request

from ptconnect.services.catalog import search_exercises
from ptconnect.utils.decorators import role_required

from . import coach_bp


@coach_bp.route("/api/exercises", methods=["GET"])
@role_required("pt")
def exercises(current_profile):
    limit = request.args.get("limit", type=int)
    entries = search_exercises(current_profile.id, request.args.get("q", ""), limit=limit)
    return jsonify([entry.to_dict() for entry in entries]), 200
