"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, Field

from accounts_api.schemas.user import UserResponse


class UserLogin(BaseModel):
    """User login request."""

    email: str | None = None
    password: str | None = None


class TokenClaims(BaseModel):
    """Identity asserted by a verified token. Immutable once decoded."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    email: str
    is_verified: bool = Field(alias="isVerified")


class LoginResponse(BaseModel):
    """Login response with token and user info."""

    message: str = "Login successful"
    token: str
    user: UserResponse


class TokenCheckResponse(BaseModel):
    """Result of checking a bearer token."""

    message: str = "Token is valid."
    decoded: TokenClaims
