# ptconnect/utils/timeutils.py
from datetime import datetime, timezone


def utcnow():
    """Current time as a naive UTC datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value):
    """Normalize an aware datetime to naive UTC; naive values are assumed UTC."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def isoformat_utc(value):
    if value is None:
        return None
    return to_utc_naive(value).isoformat() + "Z"
