from flask import Blueprint

coach_bp = Blueprint('coach', __name__)

from . import dashboard, routines, clients, calendar, health, exercises, notifications
