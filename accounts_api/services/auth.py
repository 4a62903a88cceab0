"""Authentication: credential checks and login."""

import logging

from sqlalchemy.orm import Session

from accounts_api.models.user import User
from accounts_api.repositories.user_repository import UserRepository
from accounts_api.schemas.auth import LoginResponse
from accounts_api.services.passwords import verify_password
from accounts_api.services.tokens import create_access_token
from accounts_api.services.user_service import to_safe_user

logger = logging.getLogger(__name__)


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = UserRepository(db).find_by_email(email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def login(db: Session, email: str, password: str) -> LoginResponse | None:
    """Check credentials and issue a token.

    Returns None for an unknown email or a wrong password alike.
    """
    user = authenticate_user(db, email, password)
    if not user:
        logger.info(f"Login failed for {email!r}")
        return None

    logger.info(f"User logged in: {user.id}")
    return LoginResponse(token=create_access_token(user), user=to_safe_user(user))
