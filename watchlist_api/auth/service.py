"""Authentication service: password policy, hashing, user creation, login.

prepare_user() is the only place a clear password is turned into a hash.
It validates the password against the configured policy and returns a
NewUser value object; create_user() persists it.
"""

import logging
import re
import sqlite3

import bcrypt

from ..config import Settings
from ..db import Core
from ..exceptions import ValidationError
from .schemas import NewUser, UserCreate, UserResponse

logger = logging.getLogger(__name__)

# bcrypt only uses the first 72 bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72


# ============================================================================
# Password Hashing
# ============================================================================


def hash_password(password: str, work_factor: int) -> str:
    """Hash a password with bcrypt at the given work factor."""
    salt = bcrypt.gensalt(rounds=work_factor)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a clear password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Over-long input or a malformed stored hash never matches
        return False


# ============================================================================
# User Creation
# ============================================================================


def prepare_user(data: UserCreate, settings: Settings) -> NewUser:
    """
    Validate the registration password and hash it.

    Checks run in order: presence, policy regex, bcrypt length limit,
    confirmation match.

    Raises:
        ValidationError: With the message of the first failing check
    """
    if not data.password:
        raise ValidationError("Password is required", {"field": "password"})

    if not re.fullmatch(settings.password_regex, data.password, re.ASCII):
        raise ValidationError(settings.password_regex_error_message, {"field": "password"})

    if len(data.password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValidationError(
            "Password is too long, maximum 72 bytes", {"field": "password"}
        )

    if data.password != data.confirm_password:
        raise ValidationError("Passwords do not match", {"field": "confirmPassword"})

    return NewUser(
        username=data.username,
        email=data.email,
        password_hash=hash_password(data.password, settings.bcrypt_work_factor),
    )


def create_user(core: Core, data: UserCreate, settings: Settings) -> UserResponse:
    """
    Validate, hash and insert a user.

    Raises:
        ValidationError: If the password fails policy, or username/email
            is already in use
    """
    new_user = prepare_user(data, settings)
    try:
        user_id = core.user.create(new_user.username, new_user.email, new_user.password_hash)
    except sqlite3.IntegrityError as e:
        raise _uniqueness_error(e, new_user) from e

    return UserResponse(id=user_id, username=new_user.username, email=new_user.email)


def _uniqueness_error(error: sqlite3.IntegrityError, user: NewUser) -> ValidationError:
    """Map a users UNIQUE constraint failure to the field that collided."""
    message = str(error)
    if "users.username" in message:
        return ValidationError("Username is already in use", {"username": user.username})
    if "users.email" in message:
        return ValidationError("Email is already in use", {"email": user.email})
    return ValidationError("User could not be created", {"reason": message})


# ============================================================================
# Lookup and Credentials
# ============================================================================


def _row_to_user_response(core: Core, row: sqlite3.Row) -> UserResponse:
    return UserResponse(
        id=row["id"],
        username=row["username"],
        email=row["email"],
        owned_watchlists=core.user.owned_watchlist_ids(row["id"]),
    )


def get_user_by_id(core: Core, user_id: str) -> UserResponse | None:
    """Get user by ID, including owned watchlist IDs."""
    row = core.user.get_by_id(user_id)
    if row is None:
        return None
    return _row_to_user_response(core, row)


def verify_credentials(core: Core, email: str, password: str) -> UserResponse | None:
    """
    Return the user if email and password match, else None.

    Unknown email and wrong password are indistinguishable to the caller.
    """
    row = core.user.get_by_email(email)
    if row is None:
        logger.debug("Login attempt for unknown email")
        return None

    if not verify_password(password, row["password_hash"]):
        return None

    return _row_to_user_response(core, row)
