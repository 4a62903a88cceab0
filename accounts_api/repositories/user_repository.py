"""SQLAlchemy implementation of the user credential store."""

import logging
import re
from typing import Any

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from accounts_api.errors import DuplicateConflictError, InternalError, ValidationError
from accounts_api.models.user import NAME_MAX_LENGTH, NAME_MIN_LENGTH, User

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"[A-Za-z0-9]+")

DEFAULT_SEARCH_LIMIT = 10

# Columns a caller may write through update_fields
UPDATABLE_FIELDS = ("name", "email", "password_hash", "is_verified")

# Everything except the password hash
PUBLIC_COLUMNS = (
    User.id,
    User.name,
    User.email,
    User.is_verified,
    User.created_at,
    User.updated_at,
)


def validate_name(name: str) -> None:
    """Raise ValidationError unless name is 2-20 alphanumeric characters."""
    if not isinstance(name, str) or not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise ValidationError(
            f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
        )
    if not NAME_PATTERN.fullmatch(name):
        raise ValidationError("Name may only contain letters and digits, without spaces")


def validate_email_address(email: str) -> None:
    """Raise ValidationError unless email is syntactically valid."""
    try:
        validate_email(email, check_deliverability=False)
    except (EmailNotValidError, TypeError) as e:
        raise ValidationError("Invalid email address") from e


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class UserRepository:
    """Persists user rows and enforces column-level constraints."""

    def __init__(self, db: Session):
        self.db = db

    # ── write operations ─────────────────────────────────────

    def insert(self, name: str, email: str, password_hash: str) -> User:
        """Insert a new user. Raises ValidationError or DuplicateConflictError."""
        validate_name(name)
        validate_email_address(email)
        self._ensure_unique(name=name, email=email)

        user = User(name=name, email=email, password_hash=password_hash, is_verified=False)
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        return user

    def update_fields(self, user_id: str, fields: dict[str, Any]) -> User | None:
        """Apply a partial update. Returns None if the user does not exist.

        Keys outside UPDATABLE_FIELDS are ignored.
        """
        user = self.find_by_id(user_id)
        if not user:
            return None

        changes = {key: value for key, value in fields.items() if key in UPDATABLE_FIELDS}
        if "name" in changes:
            validate_name(changes["name"])
        if "email" in changes:
            validate_email_address(changes["email"])
        self._ensure_unique(
            name=changes.get("name"), email=changes.get("email"), exclude_id=user.id
        )

        for key, value in changes.items():
            setattr(user, key, value)
        self._commit()
        self.db.refresh(user)
        return user

    def delete(self, user_id: str) -> bool:
        """Hard-delete a user. Returns True iff a row was removed."""
        deleted = self.db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
        self._commit()
        return deleted > 0

    # ── read operations ──────────────────────────────────────

    def find_by_id(self, user_id: str) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def find_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def find_by_name(self, name: str) -> User | None:
        return self.db.query(User).filter(User.name == name).first()

    def search(self, term: str, limit: int = DEFAULT_SEARCH_LIMIT, offset: int = 0) -> list[Any]:
        """Case-insensitive substring match on name or email.

        Returns rows without the password hash column, ordered by name.
        """
        pattern = f"%{_escape_like(term)}%"
        return (
            self.db.query(*PUBLIC_COLUMNS)
            .filter(
                or_(
                    User.name.ilike(pattern, escape="\\"),
                    User.email.ilike(pattern, escape="\\"),
                )
            )
            .order_by(User.name)
            .offset(offset)
            .limit(limit)
            .all()
        )

    # ── helpers ──────────────────────────────────────────────

    def _ensure_unique(
        self, name: str | None = None, email: str | None = None, exclude_id: str | None = None
    ) -> None:
        if email is not None:
            existing = self.find_by_email(email)
            if existing and existing.id != exclude_id:
                raise DuplicateConflictError("Email already exists")
        if name is not None:
            existing = self.find_by_name(name)
            if existing and existing.id != exclude_id:
                raise DuplicateConflictError("Name already exists")

    def _commit(self) -> None:
        """Commit, mapping store failures onto domain errors.

        Unique-constraint violations become DuplicateConflictError; any other
        store failure becomes InternalError.
        """
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"User write rejected by store constraint: {e.orig}")
            raise DuplicateConflictError("User with this name or email already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"User write failed: {e}")
            raise InternalError("User store write failed") from e
