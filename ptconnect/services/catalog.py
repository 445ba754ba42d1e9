"""
PT-scoped exercise catalog.

Resolution never creates a duplicate name: the unique constraint on
``(pt_id, name_key)`` decides, and an insert that loses a race is retried as a
lookup. ``name_key`` is the trimmed, case-folded name, computed in Python for
both the lookup and the stored row.
"""
import logging

from flask import current_app
from sqlalchemy import case
from sqlalchemy.exc import IntegrityError

from ptconnect.errors import NotFoundError, StoreError, ValidationError
from ptconnect.extensions import db
from ptconnect.models import ExerciseCatalogEntry
from ptconnect.models.exercise_catalog import catalog_name_key
from ptconnect.services import store_guard

logger = logging.getLogger(__name__)


def find_owned_entry(pt_id, catalog_id):
    return ExerciseCatalogEntry.query.filter_by(id=catalog_id, pt_id=pt_id).first()


def find_entry_by_name(pt_id, name):
    return ExerciseCatalogEntry.query.filter_by(pt_id=pt_id, name_key=catalog_name_key(name)).first()


def resolve_catalog_entry(pt_id, name, catalog_id=None, notes=None, default_rest_seconds=None):
    """
    Return the id of the PT's catalog entry for an exercise reference.

    Order: the given ``catalog_id`` if this PT owns it, then a case-insensitive
    match on the trimmed name, then a new entry.
    """
    trimmed = (name or "").strip()

    with store_guard("look up exercise"):
        if catalog_id is not None:
            entry = find_owned_entry(pt_id, catalog_id)
            if entry is not None:
                return entry.id
            if not trimmed:
                raise NotFoundError("Exercise not found")

    if not trimmed:
        raise ValidationError("Exercise name is required")

    attempts = current_app.config.get("CATALOG_INSERT_ATTEMPTS", 3)
    for attempt in range(1, attempts + 1):
        with store_guard("look up exercise"):
            entry = find_entry_by_name(pt_id, trimmed)
            if entry is not None:
                return entry.id

            entry = ExerciseCatalogEntry(
                pt_id=pt_id,
                name=trimmed,
                instruction_notes=notes,
                default_rest_seconds=default_rest_seconds,
            )
            db.session.add(entry)
            try:
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                logger.info(
                    f"Catalog entry {trimmed!r} for PT {pt_id} was created concurrently "
                    f"(attempt {attempt}/{attempts}); retrying lookup"
                )
                continue

            logger.info(f"Created catalog entry {entry.id} {trimmed!r} for PT {pt_id}")
            return entry.id

    raise StoreError("Failed to create exercise in catalog")


def search_exercises(pt_id, query="", limit=None):
    """
    Ranked catalog search: prefix matches before substring matches, then by name.
    An empty query lists the catalog alphabetically.
    """
    config = current_app.config
    if limit is None:
        limit = config.get("EXERCISE_SEARCH_DEFAULT_LIMIT", 10)
    limit = min(max(int(limit), 1), config.get("EXERCISE_SEARCH_MAX_LIMIT", 25))

    name_key = ExerciseCatalogEntry.name_key
    q = ExerciseCatalogEntry.query.filter(ExerciseCatalogEntry.pt_id == pt_id)

    term = catalog_name_key(query)
    if term:
        q = q.filter(name_key.contains(term, autoescape=True)).order_by(
            case((name_key.startswith(term, autoescape=True), 0), else_=1),
            name_key,
        )
    else:
        q = q.order_by(name_key)

    with store_guard("search exercises"):
        return q.limit(limit).all()
