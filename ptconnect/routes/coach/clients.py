from flask import jsonify, request

from ptconnect.schemas.profile import client_create_schema, client_update_schema
from ptconnect.services.clients import create_client, update_client
from ptconnect.utils.decorators import role_required

from . import coach_bp


@coach_bp.route("/api/clients", methods=["POST"])
@role_required("pt")
def add_client(current_profile):
    data = client_create_schema.load(request.get_json() or {})
    client, password = create_client(current_profile, data["name"], data["email"], password=data["password"])
    body = {"success": True, "client": client.to_dict()}
    if data["password"] is None:
        body["temporaryPassword"] = password
    return jsonify(body), 201


@coach_bp.route("/api/clients", methods=["PUT"])
@role_required("pt")
def edit_client(current_profile):
    data = client_update_schema.load(request.get_json() or {})
    client = update_client(current_profile.id, data["client_id"], name=data["name"], email=data["email"])
    return jsonify({"success": True, "client": client.to_dict()}), 200
