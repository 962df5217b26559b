"""Common Pydantic schemas shared across the API."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """Single-message error response."""

    error: str


class ValidationErrorResponse(BaseModel):
    """Field-level validation failure response."""

    error: str = "Validation failed"
    violations: dict[str, str]


def require_not_blank(value: str) -> str:
    """Reject strings made only of whitespace."""
    if not value.strip():
        raise ValueError("must not be blank")
    return value


def to_naive_utc(value: datetime) -> datetime:
    """Store offset-aware timestamps as naive UTC, like every other timestamp."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
