"""Issuing and verifying signed session tokens."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from accounts_api.config import get_settings
from accounts_api.models.user import User
from accounts_api.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

settings = get_settings()


def create_access_token(user: User, expires_delta: timedelta | None = None) -> str:
    """Create a JWT carrying the user's public claims.

    The password hash is never part of the payload.
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_expiration_minutes))
    to_encode = {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "isVerified": bool(user.is_verified),
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> TokenClaims | None:
    """Decode and validate a JWT token.

    Every failure (bad signature, expiry, malformed token, missing claims)
    returns None so callers cannot tell the reasons apart.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return TokenClaims.model_validate(payload)
    except (JWTError, PydanticValidationError) as e:
        logger.debug(f"Token verification failed: {type(e).__name__}")
        return None
