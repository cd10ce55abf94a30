"""
core/timeutil.py -- UTC clock and the boundary timestamp format.

Timestamps are stored as native datetimes and rendered only at the API
boundary, always as ISO-8601 UTC with millisecond precision and a "Z" suffix
(e.g. 2024-05-01T10:00:00.000Z).
"""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite DATETIME drops tzinfo on the way back)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def render_timestamp(value: datetime | None) -> str:
    if value is None:
        return ""
    return ensure_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")
