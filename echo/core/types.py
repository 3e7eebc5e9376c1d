"""
Column adapters shared by every table.

SQLite has no native boolean or timezone-aware timestamp, so both are
converted at the application layer.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.types import TypeDecorator, Integer, String


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def next_timestamp(previous: Optional[datetime]) -> datetime:
    """Current UTC time, never earlier than ``previous``."""
    now = utcnow()
    if previous is not None and now < previous:
        return previous
    return now


class IntegerBoolean(TypeDecorator):
    """Stores ``True``/``False`` as ``1``/``0``."""

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return 1 if value else 0

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return value == 1


class IsoTimestamp(TypeDecorator):
    """Stores aware datetimes as ISO-8601 text in UTC and reads them back aware."""

    impl = String(40)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return datetime.fromisoformat(value)
