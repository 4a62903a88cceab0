"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from accounts_api.api.dependencies import get_current_claims
from accounts_api.api.validation import require_fields
from accounts_api.database import get_db
from accounts_api.errors import UnauthenticatedError
from accounts_api.schemas.auth import LoginResponse, TokenCheckResponse, TokenClaims, UserLogin
from accounts_api.services.auth import login as login_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    require_fields(credentials, "email", "password", message="Email and password are required.")

    result = login_user(db, credentials.email, credentials.password)
    if not result:
        raise UnauthenticatedError("Invalid email or password.")

    return result


@router.get("/verify", response_model=TokenCheckResponse)
def verify_token(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
):
    """Check that the bearer token is valid and return its claims."""
    return TokenCheckResponse(decoded=claims)
