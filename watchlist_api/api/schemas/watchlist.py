"""Watchlist request and response schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 10


# ============================================================================
# Request Schemas
# ============================================================================


class WatchlistCreate(BaseModel):
    """POST /watchlists body."""

    name: str

    @field_validator("name")
    @classmethod
    def validate_name_length(cls, v: str) -> str:
        if len(v) < NAME_MIN_LENGTH:
            raise PydanticCustomError(
                "name_too_short", "Watchlist name is too short, minimum 2 characters"
            )
        if len(v) > NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "name_too_long", "Watchlist name is too long, maximum 10 characters"
            )
        return v


class UsernameRequest(BaseModel):
    """Invite / remove-user body. A missing username is reported by the handler."""

    username: str | None = None


class MovieAdd(BaseModel):
    """PUT /watchlists/<id>/movies body."""

    model_config = ConfigDict(populate_by_name=True)

    movie_id: int = Field(default=None, alias="movieId", validate_default=True)

    @field_validator("movie_id", mode="before")
    @classmethod
    def validate_movie_id(cls, v):
        # Also rejects a missing id, bools and numeric strings such as "12"
        if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
            raise PydanticCustomError("movie_id_invalid", "The movie id must be a number")
        return v


# ============================================================================
# Response Schemas
# ============================================================================


class UserSummary(BaseModel):
    """Public view of a user inside a watchlist (no email, no owned lists)."""

    id: str
    username: str


class WatchlistSummary(BaseModel):
    """Item of GET /watchlists (no invitedUsers)."""

    id: str
    name: str
    owner: UserSummary
    movies: list[int]


class WatchlistDetail(WatchlistSummary):
    """GET /watchlists/<id>, visible to the owner and invitees."""

    model_config = ConfigDict(populate_by_name=True)

    invited_users: list[UserSummary] = Field(alias="invitedUsers")


class WatchlistCreated(BaseModel):
    """POST /watchlists response."""

    model_config = ConfigDict(populate_by_name=True)

    watchlist_id: str = Field(alias="watchlistId")
    name: str


class MessageResponse(BaseModel):
    message: str
