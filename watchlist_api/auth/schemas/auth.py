"""Authentication Pydantic schemas.

Request schemas validate shape and field rules (username length, email
format). Password policy lives in service.prepare_user() because the
policy regex comes from Settings.
"""

import re

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

EMAIL_REGEX = re.compile(
    r"^\w+([\.-]?\w+)*@[a-zA-Z]+([\.-]?[a-zA-Z]+)*(\.[a-zA-Z]{2,3})+$",
    re.ASCII,
)

USERNAME_MIN_LENGTH = 2
USERNAME_MAX_LENGTH = 10


# ============================================================================
# User Schemas
# ============================================================================


class UserBase(BaseModel):
    """Fields shared by registration input and user output."""

    username: str
    email: str


class UserCreate(UserBase):
    """Registration request.

    The clear password may be sent as ``password`` or ``clearPassword``.
    Both password fields are optional here so a missing password reports
    "Password is required" rather than a generic schema error.
    """

    password: str | None = Field(
        default=None,
        validation_alias=AliasChoices("password", "clearPassword"),
    )
    confirm_password: str | None = Field(
        default=None,
        validation_alias=AliasChoices("confirmPassword", "confirm_password"),
    )

    @field_validator("username")
    @classmethod
    def validate_username_length(cls, v: str) -> str:
        if len(v) < USERNAME_MIN_LENGTH:
            raise PydanticCustomError(
                "username_too_short", "Username is too short, minimum 2 characters"
            )
        if len(v) > USERNAME_MAX_LENGTH:
            raise PydanticCustomError(
                "username_too_long", "Username is too long, maximum 10 characters"
            )
        return v

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        if not EMAIL_REGEX.fullmatch(v):
            raise PydanticCustomError(
                "email_invalid", "Please enter a valid email address"
            )
        return v


class UserLogin(BaseModel):
    """Login request. Missing fields are reported by the handler as 401."""

    email: str | None = None
    password: str | None = None

    @field_validator("email", "password", mode="before")
    @classmethod
    def non_string_as_missing(cls, v):
        # {"email": 5} is answered like an absent email
        return v if isinstance(v, str) else None


class UserResponse(UserBase):
    """User as returned by the API. Never carries a password or hash."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    owned_watchlists: list[str] = Field(default_factory=list, alias="ownedWatchlists")


class NewUser(BaseModel):
    """Validated user ready to persist, produced by service.prepare_user()."""

    username: str
    email: str
    password_hash: str


# ============================================================================
# Token Schemas
# ============================================================================


class TokenPayload(BaseModel):
    """Decoded JWT payload: {userId, username, exp}."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    username: str
    exp: int


class TokenResponse(BaseModel):
    """Login response: {token, user}."""

    token: str
    user: UserResponse
