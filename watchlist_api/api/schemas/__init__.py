"""Pydantic schemas for the watchlist API.

Auth schemas are re-exported for convenience in API endpoints.
"""

from watchlist_api.auth.schemas import (
    TokenPayload,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)

from .watchlist import (
    MessageResponse,
    MovieAdd,
    UsernameRequest,
    UserSummary,
    WatchlistCreate,
    WatchlistCreated,
    WatchlistDetail,
    WatchlistSummary,
)

__all__ = [
    "WatchlistCreate",
    "UsernameRequest",
    "MovieAdd",
    "UserSummary",
    "WatchlistSummary",
    "WatchlistDetail",
    "WatchlistCreated",
    "MessageResponse",
    # Auth schemas (re-exported from watchlist_api.auth.schemas)
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "TokenPayload",
    "TokenResponse",
]
