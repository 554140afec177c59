from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(dt: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_date(value: str) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime string.

    Returns None when the string is not a date. Date-only values become
    midnight UTC.
    """
    s = value.strip()
    if not s:
        return None
    try:
        parsed = datetime.fromisoformat(s)
    except ValueError:
        return None
    return ensure_aware(parsed)


def coerce_datetime(value: Any) -> Optional[datetime]:
    """
    Best-effort conversion of whatever a content record stores as a date.
    - datetime -> aware datetime
    - date -> midnight UTC
    - int/float -> POSIX timestamp
    - str -> ISO-8601
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_aware(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        return parse_date(value)
    return None


def to_iso8601(value: Any) -> Optional[str]:
    """
    Format a date-like value as an ISO-8601 UTC string (seconds precision).

    Strings that do not parse are returned unchanged: they were authored by
    hand and are passed through as-is.
    """
    dt = coerce_datetime(value)
    if dt is None:
        return value if isinstance(value, str) and value.strip() else None
    return dt.astimezone(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
