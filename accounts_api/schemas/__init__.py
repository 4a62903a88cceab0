"""Pydantic schemas for API requests and responses."""

from accounts_api.schemas.auth import LoginResponse, TokenCheckResponse, TokenClaims, UserLogin
from accounts_api.schemas.user import (
    MessageResponse,
    Pagination,
    PasswordChange,
    UserCreate,
    UserMessageResponse,
    UserResponse,
    UserSearchResponse,
    UserUpdate,
)

__all__ = [
    "UserLogin",
    "TokenClaims",
    "LoginResponse",
    "TokenCheckResponse",
    "UserCreate",
    "UserUpdate",
    "PasswordChange",
    "UserResponse",
    "UserMessageResponse",
    "MessageResponse",
    "Pagination",
    "UserSearchResponse",
]
