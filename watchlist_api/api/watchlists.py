"""Watchlist endpoints for the Watchlist API.

This module implements the watchlist resource:
- GET    /watchlists                          - Lists owned or invited to
- POST   /watchlists                          - Create watchlist
- GET    /watchlists/{id}                     - Get single watchlist
- PUT    /watchlists/{id}/invite              - Invite a user (owner only)
- DELETE /watchlists/{id}/remove-user         - Remove an invitee
- PUT    /watchlists/{id}/movies              - Add a movie (owner only)
- DELETE /watchlists/{id}/movies/{movie_id}   - Remove a movie (owner only)

Every endpoint requires a bearer token (blueprint before_request).
Handlers that check permissions and then write run in one atomic Core.
"""

import logging
import sqlite3

from flask import Blueprint, g, jsonify, request

from ..auth.decorators import _authenticate_request
from ..config import current_settings
from ..db import Core, get_core
from ..exceptions import PermissionDenied, ResourceNotFound, ValidationError
from .schemas import (
    MessageResponse,
    MovieAdd,
    UsernameRequest,
    UserSummary,
    WatchlistCreate,
    WatchlistCreated,
    WatchlistDetail,
    WatchlistSummary,
)
from .validation import validate_request

logger = logging.getLogger(__name__)


watchlists_bp = Blueprint("watchlists", __name__)


@watchlists_bp.before_request
def authenticate():
    """Require a valid bearer token for every watchlist endpoint.

    CORS preflight requests carry no credentials and are let through.
    """
    if request.method == "OPTIONS":
        return
    _authenticate_request()


# ============================================================================
# Serialization
# ============================================================================


def _owner_summary(row: sqlite3.Row) -> UserSummary:
    return UserSummary(id=row["owner_id"], username=row["owner_username"])


def _row_to_watchlist_summary(core: Core, row: sqlite3.Row) -> dict:
    """List item: owner reduced to {id, username}, no invited users."""
    return WatchlistSummary(
        id=row["id"],
        name=row["name"],
        owner=_owner_summary(row),
        movies=core.watchlist.movies(row["id"]),
    ).model_dump()


def _row_to_watchlist_detail(core: Core, row: sqlite3.Row) -> dict:
    invited = [
        UserSummary(id=user["id"], username=user["username"])
        for user in core.watchlist.invited_users(row["id"])
    ]
    return WatchlistDetail(
        id=row["id"],
        name=row["name"],
        owner=_owner_summary(row),
        movies=core.watchlist.movies(row["id"]),
        invited_users=invited,
    ).model_dump(by_alias=True)


def _message(text: str):
    return jsonify(MessageResponse(message=text).model_dump()), 200


def _require_username(data: UsernameRequest) -> str:
    if not data.username:
        raise ValidationError("Username is required", {"field": "username"})
    return data.username


# ============================================================================
# Watchlist Endpoints
# ============================================================================


@watchlists_bp.get("")
def list_watchlists():
    """
    List watchlists the caller owns or is invited to.

    Owned watchlists come first. Each item carries the owner's id and
    username only; invited users are not included.

    Returns:
        200: Array of WatchlistSummary objects

    Example response:
    ```json
    [
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "name": "Movies",
            "owner": {"id": "660e8400-e29b-41d4-a716-446655440000", "username": "alice"},
            "movies": [603, 27205]
        }
    ]
    ```
    """
    core = get_core(current_settings().database_url)
    rows = core.watchlist.list_for_user(g.user_id)

    return jsonify([_row_to_watchlist_summary(core, row) for row in rows])


@watchlists_bp.post("")
@validate_request
def create_watchlist(data: WatchlistCreate):
    """
    Create a watchlist owned by the caller.

    Request Body (WatchlistCreate):
        - name: str (2-10 characters, required)

    Returns:
        201: {"watchlistId": "...", "name": "..."}
        400: Validation error
    """
    with get_core(current_settings().database_url, atomic=True) as core:
        watchlist_id = core.watchlist.create(data.name, g.user_id)

    logger.info(f"Watchlist {watchlist_id} created by {g.username}")

    return jsonify(
        WatchlistCreated(watchlist_id=watchlist_id, name=data.name).model_dump(by_alias=True)
    ), 201


@watchlists_bp.get("/<watchlist_id>")
def get_watchlist(watchlist_id: str):
    """
    Get a single watchlist with its invited users and movies.

    Returns:
        200: WatchlistDetail
        403: Caller is neither owner nor invitee
        404: Watchlist not found
    """
    core = get_core(current_settings().database_url)
    row = core.watchlist.get_by_id(watchlist_id)

    if row["owner_id"] != g.user_id and not core.watchlist.is_invited(watchlist_id, g.user_id):
        logger.warning(f"{g.username} denied read access to watchlist {watchlist_id}")
        raise PermissionDenied(
            "You are not allowed to view this watchlist",
            {"watchlist_id": watchlist_id}
        )

    return jsonify(_row_to_watchlist_detail(core, row))


# ============================================================================
# Membership Endpoints
# ============================================================================


@watchlists_bp.put("/<watchlist_id>/invite")
@validate_request
def invite_user(watchlist_id: str, data: UsernameRequest):
    """
    Invite a user to a watchlist (owner only).

    Request Body:
        - username: str (required)

    Returns:
        200: {"message": "User added to watchlist"}
        400: Username missing, user is the owner, or already invited
        403: Caller is not the owner
        404: Watchlist or user not found
    """
    username = _require_username(data)

    with get_core(current_settings().database_url, atomic=True) as core:
        watchlist = core.watchlist.get_by_id(watchlist_id)

        if watchlist["owner_id"] != g.user_id:
            logger.warning(f"{g.username} tried to invite to watchlist {watchlist_id}")
            raise PermissionDenied(
                "You are not allowed to invite users to this watchlist",
                {"watchlist_id": watchlist_id}
            )

        invitee = core.user.get_by_username(username)
        if invitee is None:
            raise ResourceNotFound("User not found", {"username": username})

        if invitee["id"] == watchlist["owner_id"]:
            raise ValidationError(
                "You cannot invite yourself to your own watchlist",
                {"username": username}
            )

        if core.watchlist.is_invited(watchlist_id, invitee["id"]):
            raise ValidationError(
                "User is already invited to the watchlist",
                {"username": username}
            )

        try:
            core.watchlist.add_invite(watchlist_id, invitee["id"])
        except sqlite3.IntegrityError as e:
            # Concurrent invite committed between the check and the insert
            raise ValidationError(
                "User is already invited to the watchlist",
                {"username": username}
            ) from e

    logger.info(f"{username} invited to watchlist {watchlist_id} by {g.username}")

    return _message("User added to watchlist")


@watchlists_bp.delete("/<watchlist_id>/remove-user")
@validate_request
def remove_user(watchlist_id: str, data: UsernameRequest):
    """
    Remove an invited user from a watchlist.

    The owner may remove any invitee; an invitee may remove only
    themselves. The owner cannot be removed.

    Request Body:
        - username: str (required) - the user to remove

    Returns:
        200: {"message": "User removed from watchlist"}
        400: Username missing
        403: Caller may not remove this user, or target is the owner
        404: Watchlist or user not found, or user not invited
    """
    username = _require_username(data)

    with get_core(current_settings().database_url, atomic=True) as core:
        watchlist = core.watchlist.get_by_id(watchlist_id)
        caller_is_owner = watchlist["owner_id"] == g.user_id

        if not caller_is_owner and not core.watchlist.is_invited(watchlist_id, g.user_id):
            logger.warning(f"{g.username} tried to remove users from watchlist {watchlist_id}")
            raise PermissionDenied(
                "You are not allowed to remove users from this watchlist",
                {"watchlist_id": watchlist_id}
            )

        target = core.user.get_by_username(username)
        if target is None:
            raise ResourceNotFound("User not found", {"username": username})

        if not caller_is_owner and target["id"] != g.user_id:
            logger.warning(f"{g.username} tried to remove {username} from watchlist {watchlist_id}")
            raise PermissionDenied(
                "You are not allowed to remove users from this watchlist",
                {"watchlist_id": watchlist_id}
            )

        if target["id"] == watchlist["owner_id"]:
            raise PermissionDenied(
                "You cannot remove yourself from your own watchlist, you can delete it instead",
                {"watchlist_id": watchlist_id}
            )

        if not core.watchlist.remove_invite(watchlist_id, target["id"]):
            raise ResourceNotFound(
                "User is not invited to this watchlist",
                {"username": username}
            )

    logger.info(f"{username} removed from watchlist {watchlist_id} by {g.username}")

    return _message("User removed from watchlist")


# ============================================================================
# Movie Endpoints
# ============================================================================


def _require_owner(core: Core, watchlist_id: str) -> sqlite3.Row:
    watchlist = core.watchlist.get_by_id(watchlist_id)
    if watchlist["owner_id"] != g.user_id:
        logger.warning(f"{g.username} tried to modify watchlist {watchlist_id}")
        raise PermissionDenied(
            "You are not allowed to modify this watchlist",
            {"watchlist_id": watchlist_id}
        )
    return watchlist


@watchlists_bp.put("/<watchlist_id>/movies")
@validate_request
def add_movie(watchlist_id: str, data: MovieAdd):
    """
    Add a movie to a watchlist (owner only).

    Request Body (MovieAdd):
        - movieId: int (positive external movie ID)

    Returns:
        200: {"message": "Movie added to watchlist"}
        400: Invalid or duplicate movie ID
        403: Caller is not the owner
        404: Watchlist not found
    """
    with get_core(current_settings().database_url, atomic=True) as core:
        _require_owner(core, watchlist_id)
        try:
            core.watchlist.add_movie(watchlist_id, data.movie_id)
        except sqlite3.IntegrityError as e:
            raise ValidationError(
                "Movie is already in the watchlist",
                {"movieId": data.movie_id}
            ) from e

    logger.info(f"Movie {data.movie_id} added to watchlist {watchlist_id}")

    return _message("Movie added to watchlist")


@watchlists_bp.delete("/<watchlist_id>/movies/<int:movie_id>")
def remove_movie(watchlist_id: str, movie_id: int):
    """
    Remove a movie from a watchlist (owner only).

    Returns:
        200: {"message": "Movie removed from watchlist"}
        403: Caller is not the owner
        404: Watchlist not found, or movie not on it
    """
    with get_core(current_settings().database_url, atomic=True) as core:
        _require_owner(core, watchlist_id)
        if not core.watchlist.remove_movie(watchlist_id, movie_id):
            raise ResourceNotFound(
                "Movie is not in the watchlist",
                {"movieId": movie_id}
            )

    logger.info(f"Movie {movie_id} removed from watchlist {watchlist_id}")

    return _message("Movie removed from watchlist")
