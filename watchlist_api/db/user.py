"""User operations.

IMPORT CONVENTION:
- Core accesses these through core.user property
- Passwords arrive here already hashed (see auth.service.prepare_user)
"""

import sqlite3

from ..utils import isodatetime, uid


class UserOperations:
    """User table operations.

    Lookups return sqlite3.Row or None; callers decide which status a
    missing user maps to.
    """

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def create(self, username: str, email: str, password_hash: str) -> str:
        """Insert a user with an auto-generated UUID.

        Returns:
            The new user ID

        Raises:
            sqlite3.IntegrityError: If username or email is already in use
        """
        user_id = uid.generate_uuid()
        self._conn.execute(
            """INSERT INTO users (id, username, email, password_hash, created_at)
               VALUES (?, ?, ?, ?, ?)""",
            (user_id, username, email, password_hash, isodatetime.now())
        )
        return user_id

    def get_by_id(self, user_id: str) -> sqlite3.Row | None:
        return self._conn.execute(
            "SELECT * FROM users WHERE id = ?", (user_id,)
        ).fetchone()

    def get_by_email(self, email: str) -> sqlite3.Row | None:
        return self._conn.execute(
            "SELECT * FROM users WHERE email = ?", (email,)
        ).fetchone()

    def get_by_username(self, username: str) -> sqlite3.Row | None:
        """Get the single user with this username (usernames are unique)."""
        return self._conn.execute(
            "SELECT * FROM users WHERE username = ?", (username,)
        ).fetchone()

    def owned_watchlist_ids(self, user_id: str) -> list[str]:
        """IDs of watchlists owned by the user, oldest first."""
        rows = self._conn.execute(
            "SELECT id FROM watchlists WHERE owner_id = ? ORDER BY created_at, rowid",
            (user_id,)
        ).fetchall()
        return [row["id"] for row in rows]
