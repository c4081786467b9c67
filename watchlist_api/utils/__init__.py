"""Utility functions for the Watchlist API.

Import convention: use module-level imports for clarity.

    from utils import isodatetime, uid
    timestamp = isodatetime.now()
    expiry = isodatetime.now_unix() + 3600
    uuid = uid.generate_uuid()
"""

from . import isodatetime, uid

__all__ = ["isodatetime", "uid"]
