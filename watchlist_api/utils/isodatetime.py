"""Timestamps for stored rows and JWT claims.

Rows store ISO 8601 UTC strings with a ``Z`` suffix (created_at, invited_at,
added_at, updated_at). Tokens use integer Unix seconds for ``exp``.
"""

from datetime import datetime, UTC


def to_timestamp(dt: datetime) -> str:
    """Format dt as an ISO 8601 UTC string, e.g. 2026-10-18T12:30:00.123456Z.

    Naive datetimes are taken to be UTC. Microseconds are always written so
    stored timestamps sort as text.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")


def now() -> str:
    """Current UTC time as a row timestamp."""
    return to_timestamp(datetime.now(UTC))


def now_unix() -> int:
    """Current time in whole Unix seconds (JWT exp format)."""
    return int(datetime.now(UTC).timestamp())
