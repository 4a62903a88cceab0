"""Request body checks shared by the routers."""

from pydantic import BaseModel

from accounts_api.errors import ValidationError


def require_fields(payload: BaseModel, *fields: str, message: str | None = None) -> None:
    """Raise ValidationError if any of ``fields`` is missing or empty.

    Without ``message`` the error names the missing fields using their
    wire (alias) names.
    """
    model_fields = type(payload).model_fields
    missing = [
        model_fields[field].alias or field for field in fields if not getattr(payload, field)
    ]
    if missing:
        raise ValidationError(message or f"Missing required fields: {', '.join(missing)}")
