"""Authentication decorators for protected endpoints.

This module provides:
- @auth_required - Requires a valid JWT bearer token
- _authenticate_request() - Shared logic, also used by the watchlists
  blueprint's before_request handler
"""

import logging
import re
from functools import wraps

import jwt
from flask import g, request

from ..config import current_settings
from ..exceptions import AuthenticationError
from . import token

logger = logging.getLogger(__name__)

BEARER_PATTERN = re.compile(r"^Bearer (.+)$")


# ============================================================================
# Shared Authentication Logic
# ============================================================================


def _authenticate_request():
    """
    Verify the Authorization: Bearer <token> header.

    Stores authenticated user information in flask.g:
    - g.user_id: User ID (UUID)
    - g.username: Username

    Raises:
        AuthenticationError: If the header is missing, malformed, or the
            token fails signature/expiry verification
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        logger.warning(f"Unauthenticated request to {request.path}")
        raise AuthenticationError("Authorization header is missing")

    match = BEARER_PATTERN.match(auth_header)
    if not match:
        logger.warning(f"Malformed Authorization header on {request.path}")
        raise AuthenticationError(
            "Authorization header is invalid",
            {"expected": "Authorization: Bearer <token>"}
        )

    try:
        payload = token.validate_access_token(match.group(1), current_settings())
    except jwt.ExpiredSignatureError:
        logger.warning("JWT token expired")
        raise AuthenticationError("Invalid token", {"code": "token_expired"})
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid JWT token: {e}")
        raise AuthenticationError("Invalid token", {"code": "invalid_token"})

    g.user_id = payload.user_id
    g.username = payload.username

    logger.debug(f"JWT authentication successful for user {g.username}")


# ============================================================================
# Auth Required Decorator
# ============================================================================


def auth_required(f):
    """
    Decorator to require a bearer token for endpoint access.

    Example:
    ```python
    @auth_bp.get("/auth/me")
    @auth_required
    def me():
        user_id = g.user_id
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        _authenticate_request()
        return f(*args, **kwargs)

    return wrapper
