"""Domain-level exceptions.

Services and dependencies raise these to express business rule violations.
The application registers a single handler that maps each class to its HTTP
status code and a ``{"message": ...}`` body.
"""

from fastapi import status


class DomainError(Exception):
    """Base class for all domain errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers: dict[str, str] | None = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateConflictError(DomainError):
    """Email or name already belongs to another user."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthenticatedError(DomainError):
    """Missing, malformed, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(DomainError):
    """Valid credentials without the rights for this action."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(DomainError):
    """Referenced user does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class InternalError(DomainError):
    """Unexpected store or hashing failure."""
