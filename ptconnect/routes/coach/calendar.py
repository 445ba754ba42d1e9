from flask import jsonify, request

from ptconnect.schemas.calendar import calendar_event_input_schema
from ptconnect.services.calendar import create_event, list_events
from ptconnect.utils.decorators import role_required

from . import coach_bp


@coach_bp.route("/api/calendar", methods=["GET"])
@role_required("pt")
def calendar_events(current_profile):
    return jsonify([event.to_dict() for event in list_events(current_profile.id)]), 200


@coach_bp.route("/api/calendar", methods=["POST"])
@role_required("pt")
def add_calendar_event(current_profile):
    data = calendar_event_input_schema.load(request.get_json() or {})
    event = create_event(
        current_profile.id,
        data["title"],
        data["type"],
        data["start_date"],
        data["end_date"],
        client_id=data["client_id"],
        recurrence_rule=data["recurrence_rule"],
        notes=data["notes"],
        location=data["location"],
        is_all_day=data["is_all_day"],
    )
    return jsonify(event.to_dict()), 201
