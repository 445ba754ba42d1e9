"""Service-level exceptions and their JSON rendering.

Services raise these; the blueprints never build error responses for them by
hand. Every error renders as ``{"msg": ...}`` like the rest of the API.
"""

from flask import jsonify
from marshmallow import ValidationError as SchemaValidationError


class ServiceError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(self, message=None, details=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details

    def to_dict(self):
        payload = {"msg": self.message}
        if self.details:
            payload["errors"] = self.details
        return payload


class ValidationError(ServiceError):
    """Missing or invalid input. Raised before any write."""
    status_code = 400
    message = "Invalid request"


class ForbiddenError(ServiceError):
    status_code = 403
    message = "Forbidden"


class NotFoundError(ServiceError):
    """Referenced row is absent or not owned by the caller."""
    status_code = 404
    message = "Not found"


class StoreError(ServiceError):
    """A backing query failed. Detail is logged, never sent to the caller."""
    status_code = 500
    message = "Database error"


def register_error_handlers(app):
    @app.errorhandler(ServiceError)
    def handle_service_error(error):
        if isinstance(error, StoreError):
            app.logger.error(f"Store error: {error.__cause__!r}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SchemaValidationError)
    def handle_schema_error(error):
        return jsonify({"msg": "Invalid request", "errors": error.messages}), 400
