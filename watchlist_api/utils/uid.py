"""Identifier utilities.

All user and watchlist IDs are UUID v4 strings. This is the ONLY module that
should import uuid; other code goes through generate_uuid() / is_uuid().
"""

from uuid import UUID, uuid4


def generate_uuid() -> str:
    """Generate a random UUID v4 as a string."""
    return str(uuid4())


def is_uuid(value: str) -> bool:
    """Return True if value parses as a UUID (path params are untrusted)."""
    try:
        UUID(value)
    except (TypeError, ValueError, AttributeError):
        return False
    return True
