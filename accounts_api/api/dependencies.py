"""FastAPI dependencies for authentication, authorization and services.

The access checks form a chain: ``get_current_claims`` verifies the bearer
token, and ``require_verified_account`` / ``require_self`` build on it. Each
returns the immutable TokenClaims so handlers receive the identity as an
argument.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from accounts_api.database import get_db
from accounts_api.errors import ForbiddenError, UnauthenticatedError
from accounts_api.schemas.auth import TokenClaims
from accounts_api.services.tokens import decode_access_token
from accounts_api.services.user_service import UserService

security = HTTPBearer(auto_error=False)


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenClaims:
    """Get the authenticated identity from the Authorization header."""
    if credentials is None:
        raise UnauthenticatedError("Missing or invalid Authorization header.")

    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise UnauthenticatedError("Invalid or expired token.")

    return claims


def require_verified_account(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
) -> TokenClaims:
    """Reject accounts that have not been verified."""
    if not claims.is_verified:
        raise ForbiddenError(
            "Account not verified. Please verify your email to access this resource"
        )
    return claims


def require_self(
    user_id: str,
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
) -> TokenClaims:
    """Only allow the authenticated user to act on their own account."""
    if claims.id != user_id:
        raise ForbiddenError("Forbidden: access denied")
    return claims


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db)
