"""Authentication module for the Watchlist API.

This module provides authentication functionality:
- Schema validation for auth operations
- JWT token generation and validation
- Password policy, hashing and verification
- Authentication middleware for protected endpoints

Auth endpoints (top-level routes):
- POST /auth/register - Create a user account
- POST /auth/login - Authenticate and return JWT token
- GET /auth/me - Get current user info
"""

from . import schemas, service, token

__all__ = ["schemas", "service", "token"]
