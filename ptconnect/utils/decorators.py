# ptconnect/utils/decorators.py
from functools import wraps
from flask_jwt_extended import get_jwt_identity, jwt_required

from ptconnect.errors import ForbiddenError, NotFoundError
from ptconnect.extensions import db
from ptconnect.models.profile import Profile


def role_required(role):
    """
    Require a valid JWT whose profile has the given role ("pt" or "client").
    The loaded profile is passed to the view as ``current_profile``.
    """
    def decorator(view_func):
        @wraps(view_func)
        @jwt_required()
        def wrapper(*args, **kwargs):
            profile = db.session.get(Profile, int(get_jwt_identity()))
            if not profile:
                raise NotFoundError("Profile not found")
            if profile.role != role:
                raise ForbiddenError()

            kwargs['current_profile'] = profile
            return view_func(*args, **kwargs)
        return wrapper
    return decorator
