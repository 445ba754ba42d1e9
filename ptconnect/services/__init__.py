import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from ptconnect.errors import StoreError
from ptconnect.extensions import db

logger = logging.getLogger(__name__)


@contextmanager
def store_guard(action):
    """Roll back and raise ``StoreError`` when a query inside the block fails."""
    try:
        yield
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to {action}: {e}")
        raise StoreError(f"Failed to {action}") from e
