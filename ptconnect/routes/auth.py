from flask import Blueprint, jsonify, request
from flask_jwt_extended import create_access_token, get_jwt_identity, jwt_required

from ptconnect.extensions import db
from ptconnect.models import Profile
from ptconnect.schemas.profile import login_schema, profile_schema

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/login", methods=["POST"])
def login():
    data = login_schema.load(request.get_json() or {})
    email = data["email"].strip().lower()

    profile = Profile.query.filter(db.func.lower(Profile.email) == email).first()
    if not profile or not profile.check_password(data["password"]):
        return jsonify({"msg": "Invalid email or password"}), 401

    token = create_access_token(identity=str(profile.id), additional_claims={"role": profile.role})
    return jsonify({"access_token": token, "user": profile.to_dict()}), 200


@auth_bp.route("/user", methods=["GET"])
@jwt_required()
def current_user():
    profile = db.session.get(Profile, int(get_jwt_identity()))
    if not profile:
        return jsonify({"msg": "Profile not found"}), 404
    return jsonify(profile_schema.dump(profile)), 200
