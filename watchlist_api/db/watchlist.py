"""Watchlist operations.

Covers the watchlists table plus its two membership tables:
- watchlist_invites: users invited to a watchlist
- watchlist_movies: external movie IDs on a watchlist

IMPORT CONVENTION:
- Core accesses these through core.watchlist property

Uniqueness of invites and movies is enforced by the table primary keys;
add_invite() and add_movie() surface duplicates as sqlite3.IntegrityError.
"""

import sqlite3

from ..exceptions import ResourceNotFound
from ..utils import isodatetime, uid


class WatchlistOperations:
    """Watchlist operations."""

    def __init__(self, conn: sqlite3.Connection):
        """Initialize watchlist operations.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def create(self, name: str, owner_id: str) -> str:
        """Create a watchlist owned by owner_id.

        Returns:
            The auto-generated watchlist ID (UUID v4 string)
        """
        watchlist_id = uid.generate_uuid()
        now = isodatetime.now()
        self._conn.execute(
            """INSERT INTO watchlists (id, name, owner_id, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?)""",
            (watchlist_id, name, owner_id, now, now)
        )
        return watchlist_id

    def get_by_id(self, watchlist_id: str) -> sqlite3.Row:
        """Get watchlist joined with its owner's username.

        Raises:
            ResourceNotFound: If watchlist_id doesn't exist
        """
        row = None
        if uid.is_uuid(watchlist_id):
            row = self._conn.execute(
                """SELECT w.*, u.username AS owner_username
                   FROM watchlists w JOIN users u ON u.id = w.owner_id
                   WHERE w.id = ?""",
                (watchlist_id,)
            ).fetchone()

        if not row:
            raise ResourceNotFound(
                "Watchlist not found",
                {"watchlist_id": watchlist_id}
            )

        return row

    def list_for_user(self, user_id: str) -> list[sqlite3.Row]:
        """Watchlists the user owns, then those the user is invited to.

        One query, so a watchlist never appears twice.
        """
        return self._conn.execute(
            """SELECT w.*, u.username AS owner_username
               FROM watchlists w JOIN users u ON u.id = w.owner_id
               WHERE w.owner_id = :user_id
                  OR w.id IN (SELECT watchlist_id FROM watchlist_invites WHERE user_id = :user_id)
               ORDER BY (w.owner_id = :user_id) DESC, w.created_at, w.rowid""",
            {"user_id": user_id}
        ).fetchall()

    def _touch(self, watchlist_id: str) -> None:
        self._conn.execute(
            "UPDATE watchlists SET updated_at = ? WHERE id = ?",
            (isodatetime.now(), watchlist_id)
        )

    # ------------------------------------------------------------------
    # Invites
    # ------------------------------------------------------------------

    def invited_users(self, watchlist_id: str) -> list[sqlite3.Row]:
        """Invited users (id, username) in invitation order."""
        return self._conn.execute(
            """SELECT u.id, u.username
               FROM watchlist_invites i JOIN users u ON u.id = i.user_id
               WHERE i.watchlist_id = ?
               ORDER BY i.invited_at, i.rowid""",
            (watchlist_id,)
        ).fetchall()

    def is_invited(self, watchlist_id: str, user_id: str) -> bool:
        row = self._conn.execute(
            "SELECT 1 FROM watchlist_invites WHERE watchlist_id = ? AND user_id = ?",
            (watchlist_id, user_id)
        ).fetchone()
        return row is not None

    def add_invite(self, watchlist_id: str, user_id: str) -> None:
        """Invite a user.

        Raises:
            sqlite3.IntegrityError: If the user is already invited
        """
        self._conn.execute(
            "INSERT INTO watchlist_invites (watchlist_id, user_id, invited_at) VALUES (?, ?, ?)",
            (watchlist_id, user_id, isodatetime.now())
        )
        self._touch(watchlist_id)

    def remove_invite(self, watchlist_id: str, user_id: str) -> bool:
        """Remove an invite. Returns False if the user was not invited."""
        cursor = self._conn.execute(
            "DELETE FROM watchlist_invites WHERE watchlist_id = ? AND user_id = ?",
            (watchlist_id, user_id)
        )
        if cursor.rowcount == 0:
            return False
        self._touch(watchlist_id)
        return True

    # ------------------------------------------------------------------
    # Movies
    # ------------------------------------------------------------------

    def movies(self, watchlist_id: str) -> list[int]:
        """Movie IDs in the order they were added."""
        rows = self._conn.execute(
            "SELECT movie_id FROM watchlist_movies WHERE watchlist_id = ? ORDER BY added_at, rowid",
            (watchlist_id,)
        ).fetchall()
        return [row["movie_id"] for row in rows]

    def add_movie(self, watchlist_id: str, movie_id: int) -> None:
        """Add a movie.

        Raises:
            sqlite3.IntegrityError: If the movie is already on the watchlist
        """
        self._conn.execute(
            "INSERT INTO watchlist_movies (watchlist_id, movie_id, added_at) VALUES (?, ?, ?)",
            (watchlist_id, movie_id, isodatetime.now())
        )
        self._touch(watchlist_id)

    def remove_movie(self, watchlist_id: str, movie_id: int) -> bool:
        """Remove a movie. Returns False if it was not on the watchlist."""
        cursor = self._conn.execute(
            "DELETE FROM watchlist_movies WHERE watchlist_id = ? AND movie_id = ?",
            (watchlist_id, movie_id)
        )
        if cursor.rowcount == 0:
            return False
        self._touch(watchlist_id)
        return True
