"""Database schema for the Watchlist API.

schema.sql is the source of truth for the data model and is applied by
db.init_db() on first start.
"""

from pathlib import Path

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

__all__ = ["SCHEMA_PATH"]
