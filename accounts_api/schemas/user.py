"""User schemas."""

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Register a new user.

    Fields are optional here so missing values can be reported with a single
    "Missing required fields" message instead of a generic validation error.
    """

    name: str | None = None
    email: str | None = None
    password: str | None = None


class UserUpdate(BaseModel):
    """Update a user's profile. Password is deliberately not a field."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    email: str | None = None


class PasswordChange(BaseModel):
    """Change a user's password."""

    model_config = ConfigDict(populate_by_name=True)

    current_password: str | None = Field(None, alias="currentPassword")
    new_password: str | None = Field(None, alias="newPassword")


class UserResponse(BaseModel):
    """Sanitized user: never carries the password hash."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    name: str
    email: str
    is_verified: bool = Field(alias="isVerified")


class UserMessageResponse(BaseModel):
    """User plus a human-readable message."""

    user: UserResponse
    message: str


class MessageResponse(BaseModel):
    """Plain message response."""

    message: str


class Pagination(BaseModel):
    """Pagination metadata; count is the number of rows returned."""

    limit: int
    offset: int
    count: int


class UserSearchResponse(BaseModel):
    """Search results."""

    users: list[UserResponse]
    pagination: Pagination
