"""Custom exceptions for the Watchlist API.

Each exception maps to one HTTP status code in main.py:
- ValidationError   -> 400
- AuthenticationError -> 401
- PermissionDenied  -> 403
- ResourceNotFound  -> 404
- DatabaseError / WatchlistError -> 500
"""


class WatchlistError(Exception):
    """Base exception for all Watchlist API errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ResourceNotFound(WatchlistError):
    """Requested resource does not exist."""


class ValidationError(WatchlistError):
    """Request data failed validation."""


class AuthenticationError(WatchlistError):
    """Missing, malformed or invalid credentials."""


class PermissionDenied(WatchlistError):
    """Authenticated user is not allowed to perform the operation."""


class DatabaseError(WatchlistError):
    """Database operation failed."""
