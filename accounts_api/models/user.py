"""User model."""

import uuid

from sqlalchemy import Boolean, CheckConstraint, Column, String, false

from accounts_api.database import Base
from accounts_api.models.mixins import TimestampMixin

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 20


def generate_user_id() -> str:
    """Generate an opaque user identifier."""
    return str(uuid.uuid4())


class User(Base, TimestampMixin):
    """User account with credentials and verification state."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            f"length(name) >= {NAME_MIN_LENGTH} AND length(name) <= {NAME_MAX_LENGTH}",
            name="ck_users_name_length",
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_user_id)
    name = Column(String(NAME_MAX_LENGTH), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    is_verified = Column(Boolean, nullable=False, default=False, server_default=false())

    def __repr__(self) -> str:
        return f"<User id={self.id} name={self.name!r}>"
