import logging
import secrets

from flask import current_app

from ptconnect.errors import NotFoundError, ValidationError
from ptconnect.extensions import db
from ptconnect.models import Profile, PTClient
from ptconnect.services import store_guard
from ptconnect.services.notifications import record_notification

logger = logging.getLogger(__name__)


def _temporary_password():
    return f"Fitness{secrets.token_urlsafe(6)}!"


def _email_taken(email, exclude_id=None):
    q = Profile.query.filter(db.func.lower(Profile.email) == email)
    if exclude_id is not None:
        q = q.filter(Profile.id != exclude_id)
    return q.first() is not None


def create_client(pt, name, email, password=None):
    """Create a client profile assigned to ``pt``; returns ``(client, password)``."""
    email = email.strip().lower()
    if not (name or "").strip():
        raise ValidationError("Name and email are required")

    password = password or _temporary_password()
    with store_guard("create client"):
        if _email_taken(email):
            raise ValidationError("Email already registered")

        client = Profile(
            role="client",
            email=email,
            training_frequency_goal=current_app.config.get("DEFAULT_CLIENT_TRAINING_GOAL", 3),
        )
        client.set_name(name)
        client.set_password(password)
        db.session.add(client)
        db.session.flush()

        db.session.add(PTClient(pt_id=pt.id, client_id=client.id, status="active"))
        db.session.commit()

    logger.info(f"PT {pt.id} created client {client.id}")
    record_notification(
        pt.id,
        "client_created",
        f"{client.full_name} has been added as a client",
        title="Client added",
        client_id=client.id,
    )
    return client, password


def update_client(pt_id, client_id, name=None, email=None):
    with store_guard("update client"):
        assignment = PTClient.query.filter_by(pt_id=pt_id, client_id=client_id).first()
        if assignment is None:
            raise NotFoundError("Client not found")

        client = assignment.client
        if name:
            client.set_name(name)
        if email:
            email = email.strip().lower()
            if _email_taken(email, exclude_id=client.id):
                raise ValidationError("Email already registered")
            client.email = email
        db.session.commit()
        return client
