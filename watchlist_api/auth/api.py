"""Authentication API endpoints for the Watchlist API.

These endpoints handle user accounts and return JSON responses:
- User registration
- User login (JWT issuance)
- Current user profile

Error responses are plain text (see main.py error handlers).
"""

import logging

from flask import Blueprint, g, jsonify

from ..api.validation import validate_request
from ..config import current_settings
from ..db import get_core
from ..exceptions import AuthenticationError, ResourceNotFound
from . import service, token
from .decorators import auth_required
from .schemas import TokenResponse, UserCreate, UserLogin

logger = logging.getLogger(__name__)


# Create blueprint
auth_bp = Blueprint("auth", __name__)


# ============================================================================
# Registration
# ============================================================================


@auth_bp.route("/auth/register", methods=["POST"])
@validate_request
def register(data: UserCreate):
    """
    Register a new user.

    Args:
        data: username, email, password (or clearPassword), confirmPassword

    Returns:
        201: Created user (never includes the password)

    Raises:
        ValidationError: Invalid fields, weak or mismatched password,
            username or email already in use

    Example request:
    ```json
    {
        "username": "alice",
        "email": "alice@example.com",
        "password": "Aa1@aaaa",
        "confirmPassword": "Aa1@aaaa"
    }
    ```

    Example response:
    ```json
    {
        "id": "550e8400-e29b-41d4-a716-446655440000",
        "username": "alice",
        "email": "alice@example.com",
        "ownedWatchlists": []
    }
    ```
    """
    settings = current_settings()
    with get_core(settings.database_url, atomic=True) as core:
        user = service.create_user(core, data, settings)

    logger.info(f"User registered: {user.username}")

    return jsonify(user.model_dump(by_alias=True)), 201


# ============================================================================
# Authentication Endpoints
# ============================================================================


@auth_bp.route("/auth/login", methods=["POST"])
@validate_request
def login(data: UserLogin):
    """
    Authenticate user and return JWT token.

    Accepts both JSON and form data.

    Returns:
        200: {"token": "...", "user": {...}}

    Raises:
        AuthenticationError: If email or password is missing, or the
            credentials do not match. Unknown email and wrong password
            produce the same message.

    Example request:
    ```json
    {
        "email": "alice@example.com",
        "password": "Aa1@aaaa"
    }
    ```
    """
    if not data.email or not data.password:
        raise AuthenticationError("Email and password are required")

    settings = current_settings()
    core = get_core(settings.database_url)
    user = service.verify_credentials(core, data.email, data.password)
    if user is None:
        logger.warning("Failed login attempt")
        raise AuthenticationError("Invalid email or password")

    access_token = token.generate_access_token(user, settings)

    logger.info(f"Successful login: {user.username}")

    return jsonify(
        TokenResponse(token=access_token, user=user).model_dump(by_alias=True)
    ), 200


# ============================================================================
# User Profile Endpoints
# ============================================================================


@auth_bp.route("/auth/me", methods=["GET"])
@auth_required
def get_current_user():
    """
    Get the authenticated user's profile.

    Returns:
        200: User info, including owned watchlist IDs

    Raises:
        AuthenticationError: If token is missing or invalid
        ResourceNotFound: If the token's user no longer exists
    """
    core = get_core(current_settings().database_url)
    user = service.get_user_by_id(core, g.user_id)
    if user is None:
        raise ResourceNotFound("User not found", {"user_id": g.user_id})

    return jsonify(user.model_dump(by_alias=True)), 200
