import uuid
from datetime import datetime, timezone


def generate_uuid():
    return str(uuid.uuid4())


def utcnow():
    """Naive UTC timestamp, matching how DateTime columns are stored"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(dt):
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def format_datetime(dt):
    return dt.isoformat() if dt else None


def parse_datetime(value):
    """Parse an ISO-8601 string (date-only and trailing Z accepted) into naive UTC"""
    if value is None or isinstance(value, datetime):
        return to_naive_utc(value)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_naive_utc(datetime.fromisoformat(text))
