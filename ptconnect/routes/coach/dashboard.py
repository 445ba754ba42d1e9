from flask import jsonify

from ptconnect.services.dashboard import pt_dashboard
from ptconnect.utils.decorators import role_required

from . import coach_bp


@coach_bp.route("/api/dashboard", methods=["GET"])
@role_required("pt")
def dashboard(current_profile):
    return jsonify(pt_dashboard(current_profile)), 200
