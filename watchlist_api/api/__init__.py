"""HTTP API for the Watchlist API.

- watchlists: /watchlists resource (bearer token required)
- validation: @validate_request decorator shared with the auth endpoints
"""

from .watchlists import watchlists_bp

__all__ = ["watchlists_bp"]
