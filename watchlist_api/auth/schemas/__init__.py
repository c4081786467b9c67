"""Authentication Pydantic schemas for API validation."""

from .auth import (
    NewUser,
    TokenPayload,
    TokenResponse,
    UserBase,
    UserCreate,
    UserLogin,
    UserResponse,
)

__all__ = [
    "UserBase",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "NewUser",
    "TokenPayload",
    "TokenResponse",
]
