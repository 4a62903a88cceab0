"""User API endpoints.

Handlers are plain functions; FastAPI runs them in its threadpool.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from accounts_api.api.dependencies import (
    get_current_claims,
    get_user_service,
    require_self,
    require_verified_account,
)
from accounts_api.api.validation import require_fields
from accounts_api.errors import NotFoundError, ValidationError
from accounts_api.repositories.user_repository import DEFAULT_SEARCH_LIMIT
from accounts_api.schemas.auth import TokenClaims
from accounts_api.schemas.user import (
    MessageResponse,
    PasswordChange,
    UserCreate,
    UserMessageResponse,
    UserResponse,
    UserSearchResponse,
    UserUpdate,
)
from accounts_api.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])

USER_NOT_FOUND = "User not found"


@router.post("", response_model=UserMessageResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Register a new user."""
    require_fields(user_data, "name", "email", "password", message="Missing required fields")

    user = service.register(user_data.name, user_data.email, user_data.password)
    return UserMessageResponse(user=user, message="User created successfully")


@router.get("/search", response_model=UserSearchResponse)
def search_users(
    service: Annotated[UserService, Depends(get_user_service)],
    _claims: Annotated[TokenClaims, Depends(require_verified_account)],
    search_term: Annotated[str | None, Query(alias="searchTerm")] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = DEFAULT_SEARCH_LIMIT,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """Search users by name or email."""
    if not search_term:
        raise ValidationError("Search term is required")

    return service.search(search_term, limit=limit, offset=offset)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
    _claims: Annotated[TokenClaims, Depends(get_current_claims)],
):
    """Get a user by ID."""
    user = service.get_by_id(user_id)
    if not user:
        raise NotFoundError(USER_NOT_FOUND)
    return user


@router.put("/{user_id}", response_model=UserMessageResponse)
def update_user(
    user_id: str,
    user_data: UserUpdate,
    service: Annotated[UserService, Depends(get_user_service)],
    _claims: Annotated[TokenClaims, Depends(require_self)],
):
    """Update the authenticated user's name and/or email."""
    user = service.update(user_id, user_data.model_dump(exclude_none=True))
    if not user:
        raise NotFoundError(USER_NOT_FOUND)
    return UserMessageResponse(user=user, message="User updated successfully")


@router.put("/{user_id}/password", response_model=MessageResponse)
def change_password(
    user_id: str,
    password_data: PasswordChange,
    service: Annotated[UserService, Depends(get_user_service)],
    _claims: Annotated[TokenClaims, Depends(require_self)],
):
    """Change the authenticated user's password."""
    require_fields(
        password_data,
        "current_password",
        "new_password",
        message="Current password and new password are required",
    )

    changed = service.change_password(
        user_id, password_data.current_password, password_data.new_password
    )
    if not changed:
        raise ValidationError("Invalid current password or user not found")
    return MessageResponse(message="Password changed successfully")


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
    _claims: Annotated[TokenClaims, Depends(require_self)],
):
    """Delete the authenticated user's account."""
    if not service.delete(user_id):
        raise NotFoundError(USER_NOT_FOUND)
    return MessageResponse(message="User deleted successfully")


@router.patch("/{user_id}/verify", response_model=UserMessageResponse)
def verify_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
    _claims: Annotated[TokenClaims, Depends(require_self)],
):
    """Mark the authenticated user's account as verified.

    Meant to be called by the email confirmation flow that runs outside this
    service, acting with the user's own token.
    """
    user = service.verify(user_id)
    if not user:
        raise NotFoundError(USER_NOT_FOUND)
    return UserMessageResponse(user=user, message="User verified successfully")
