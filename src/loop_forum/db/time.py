# src/loop_forum/db/time.py
"""UTC timestamp helpers shared by models and response builders."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Column default: the current time, timezone-aware in UTC."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to a naive timestamp read back from storage.

    SQLite drops the offset on ``DateTime(timezone=True)`` columns; every value
    written through ``utcnow`` is UTC, so the offset can be restored safely.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
