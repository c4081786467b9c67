"""Database module for the Watchlist API.

This module provides the Core API for database operations.
Core encapsulates connection management and provides access to the
user and watchlist operations.

ARCHITECTURE:
- Core owns its connection (no Flask g.db dependency)
- Connection closes on context exit (atomic=True) or when Core is collected
- Each table family gets an encapsulated operations class

USAGE:

    # Single read
    core = get_core(settings.database_url)
    user = core.user.get_by_email(email)

    # Read-check-write as one transaction
    with get_core(settings.database_url, atomic=True) as core:
        watchlist = core.watchlist.get_by_id(watchlist_id)
        core.watchlist.add_invite(watchlist["id"], user["id"])

ID GENERATION POLICY:
All IDs are auto-generated UUIDs inside the operations classes; callers
never pass IDs to create().
"""

from pathlib import Path
from typing import TYPE_CHECKING
import sqlite3

from ..exceptions import DatabaseError
from ..schema import SCHEMA_PATH

if TYPE_CHECKING:
    from .user import UserOperations
    from .watchlist import WatchlistOperations

SQLITE_URL_PREFIX = "sqlite:///"


class Core:
    """
    Database Core with user and watchlist operations.

    Maintains its own connection and transaction state.
    Provides access to operations through properties.

    Connection Lifecycle:
    - atomic=True: Connection commits/rolls back and closes on __exit__
    - atomic=False: Reads only; connection closes when Core is collected
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
            atomic: If True, Core MUST be used as context manager.
        """
        self._conn = connection
        self._atomic = atomic
        self._user_ops = None
        self._watchlist_ops = None

    @property
    def user(self) -> "UserOperations":
        """User operations (lazy-loaded, cached)."""
        if self._user_ops is None:
            from .user import UserOperations
            self._user_ops = UserOperations(self._conn)
        return self._user_ops

    @property
    def watchlist(self) -> "WatchlistOperations":
        """Watchlist, invite and movie operations (lazy-loaded, cached)."""
        if self._watchlist_ops is None:
            from .watchlist import WatchlistOperations
            self._watchlist_ops = WatchlistOperations(self._conn)
        return self._watchlist_ops

    def __enter__(self) -> "Core":
        """Enter context manager for atomic transaction.

        Raises:
            RuntimeError: If Core was not created with atomic=True
        """
        if not self._atomic:
            raise RuntimeError(
                "Core must be created with atomic=True for context manager use. "
                "Use: with db.get_core(url, atomic=True) as core:"
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back transaction."""
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            self._conn.close()

    def __del__(self):
        # sqlite3.Connection.close() is a no-op on a closed connection
        if hasattr(self, "_conn") and self._conn:
            self._conn.close()


def database_path(database_url: str) -> Path:
    """Resolve a ``sqlite:///<path>`` URL (or a bare path) to a filesystem path."""
    if database_url.startswith(SQLITE_URL_PREFIX):
        database_url = database_url[len(SQLITE_URL_PREFIX):]
    return Path(database_url)


def _create_connection(database_url: str) -> sqlite3.Connection:
    """Create a fresh database connection.

    Returns:
        SQLite connection with row_factory set to sqlite3.Row
        and foreign keys enabled.

    Raises:
        DatabaseError: If the database file cannot be opened
    """
    db_path = database_path(database_url)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        conn = sqlite3.connect(str(db_path))
    except sqlite3.OperationalError as e:
        raise DatabaseError("Could not open database", {"path": str(db_path)}) from e
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def get_core(database_url: str, atomic: bool = False) -> Core:
    """
    Get a database Core instance.

    Args:
        database_url: ``sqlite:///<path>`` URL or plain path (Settings.database_url)
        atomic: If True, returns a Core that MUST be used as context manager.
                Use for handlers that check state and then write, so the
                check and the write commit together.

    Examples:
        >>> core = get_core(settings.database_url)
        >>> row = core.user.get_by_email("alice@example.com")

        >>> with get_core(settings.database_url, atomic=True) as core:
        ...     watchlist_id = core.watchlist.create("Movies", owner_id)
    """
    conn = _create_connection(database_url)
    return Core(conn, atomic=atomic)


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

def init_db(database_url: str):
    """Initialize database by running schema.sql if not already initialized."""
    db_path = database_path(database_url)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with sqlite3.connect(str(db_path)) as db:
        cursor = db.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            # Database already initialized, skip
            return

        with open(SCHEMA_PATH, "r") as f:
            schema_sql = f.read()
        db.executescript(schema_sql)
        db.commit()
