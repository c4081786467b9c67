"""JWT token service.

Tokens are HS256-signed, stateless and never persisted. Payload:

    {"userId": "<uuid>", "username": "alice", "exp": <unix seconds>}
"""

import jwt
from pydantic import ValidationError as PydanticValidationError

from ..config import Settings
from ..utils import isodatetime
from .schemas import TokenPayload, UserResponse

ALGORITHM = "HS256"

SECONDS_PER_DAY = 24 * 60 * 60


def generate_access_token(user: UserResponse, settings: Settings) -> str:
    """Issue a token for user, expiring settings.jwt_expiry_days from now."""
    exp = isodatetime.now_unix() + settings.jwt_expiry_days * SECONDS_PER_DAY
    payload = {
        "userId": user.id,
        "username": user.username,
        "exp": exp,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGORITHM)


def validate_access_token(token: str, settings: Settings) -> TokenPayload:
    """
    Verify signature and expiry, then return the decoded payload.

    Raises:
        jwt.ExpiredSignatureError: If the token has expired
        jwt.InvalidTokenError: If the token is malformed, badly signed,
            has no exp claim, or is missing userId/username
    """
    payload = jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[ALGORITHM],
        options={"require": ["exp"]},
    )
    try:
        return TokenPayload.model_validate(payload)
    except PydanticValidationError as e:
        raise jwt.InvalidTokenError("Token payload is missing userId or username") from e
