"""User directory service: CRUD and search over user accounts."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from accounts_api.errors import DuplicateConflictError, ValidationError
from accounts_api.repositories.user_repository import DEFAULT_SEARCH_LIMIT, UserRepository
from accounts_api.schemas.user import Pagination, UserResponse, UserSearchResponse
from accounts_api.services.passwords import get_password_hash, verify_password

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "email")


def to_safe_user(row: Any) -> UserResponse:
    """Project a user row onto its public representation."""
    return UserResponse.model_validate(row)


class UserService:
    """Service for user account operations.

    Every value returned to callers is a UserResponse, so the password hash
    never leaves this layer.
    """

    def __init__(self, db: Session, repository: UserRepository | None = None):
        self.db = db
        self.repository = repository or UserRepository(db)

    def is_email_unique(self, email: str) -> bool:
        """Check whether no user has this email yet."""
        return self.repository.find_by_email(email) is None

    def register(self, name: str, email: str, password: str) -> UserResponse:
        """Create an unverified user.

        Raises:
            DuplicateConflictError: email (or name) already registered
            ValidationError: name or email format rejected by the store
        """
        if not self.is_email_unique(email):
            logger.warning("Registration rejected: email already exists")
            raise DuplicateConflictError("Email already exists")

        user = self.repository.insert(
            name=name,
            email=email,
            password_hash=get_password_hash(password),
        )
        logger.info(f"User created: {user.id}")
        return to_safe_user(user)

    def get_by_id(self, user_id: str) -> UserResponse | None:
        user = self.repository.find_by_id(user_id)
        return to_safe_user(user) if user else None

    def update(self, user_id: str, fields: dict[str, Any]) -> UserResponse | None:
        """Update name and/or email. Returns None if the user does not exist.

        A password in ``fields`` is dropped; passwords change only through
        change_password.
        """
        changes = {key: fields[key] for key in PROFILE_FIELDS if fields.get(key)}
        if not changes:
            raise ValidationError("At least one field to update is required")

        user = self.repository.update_fields(user_id, changes)
        if not user:
            return None
        logger.info(f"User updated: {user_id} ({', '.join(sorted(changes))})")
        return to_safe_user(user)

    def change_password(self, user_id: str, current_password: str, new_password: str) -> bool:
        """Replace the password after checking the current one.

        Returns False, without writing anything, when the user is missing or
        the current password does not match.
        """
        user = self.repository.find_by_id(user_id)
        if not user or not verify_password(current_password, user.password_hash):
            return False

        self.repository.update_fields(user_id, {"password_hash": get_password_hash(new_password)})
        logger.info(f"Password changed for user {user_id}")
        return True

    def delete(self, user_id: str) -> bool:
        deleted = self.repository.delete(user_id)
        if deleted:
            logger.info(f"User deleted: {user_id}")
        return deleted

    def search(
        self, term: str, limit: int = DEFAULT_SEARCH_LIMIT, offset: int = 0
    ) -> UserSearchResponse:
        """Search users by name or email substring."""
        rows = self.repository.search(term, limit=limit, offset=offset)
        users = [to_safe_user(row) for row in rows]
        return UserSearchResponse(
            users=users,
            pagination=Pagination(limit=limit, offset=offset, count=len(users)),
        )

    def verify(self, user_id: str) -> UserResponse | None:
        """Mark the account verified. Calling it again changes nothing."""
        user = self.repository.find_by_id(user_id)
        if not user:
            return None
        if not user.is_verified:
            user = self.repository.update_fields(user_id, {"is_verified": True})
            logger.info(f"User verified: {user_id}")
        return to_safe_user(user)
