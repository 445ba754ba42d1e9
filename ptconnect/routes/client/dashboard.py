from flask import jsonify

from ptconnect.services.dashboard import client_dashboard
from ptconnect.utils.decorators import role_required

from . import client_bp


@client_bp.route("/api/dashboard", methods=["GET"])
@role_required("client")
def dashboard(current_profile):
    return jsonify(client_dashboard(current_profile)), 200
