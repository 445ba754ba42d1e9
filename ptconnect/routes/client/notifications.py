from flask import jsonify

from ptconnect.services.notifications import list_notifications, mark_all_read, mark_read
from ptconnect.utils.decorators import role_required

from . import client_bp


@client_bp.route("/api/notifications", methods=["GET"])
@role_required("client")
def notifications(current_profile):
    return jsonify(list_notifications(current_profile.id)), 200


@client_bp.route("/api/notifications/<int:notification_id>/read", methods=["POST"])
@role_required("client")
def read_notification(notification_id, current_profile):
    mark_read(current_profile.id, notification_id)
    return jsonify({"success": True}), 200


@client_bp.route("/api/notifications/read-all", methods=["POST"])
@role_required("client")
def read_all_notifications(current_profile):
    return jsonify({"success": True, "updated": mark_all_read(current_profile.id)}), 200
