"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_REFERENCE = "INVALID_REFERENCE"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    TODO_NOT_FOUND = "TODO_NOT_FOUND"

    # Conflict errors (409)
    USERNAME_TAKEN = "USERNAME_TAKEN"
    EMAIL_TAKEN = "EMAIL_TAKEN"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationFailedError(AppException):
    """Field-level validation failed before reaching the services.

    ``violations`` maps a field name to its message(s), joined with "; ".
    """

    def __init__(self, violations: dict[str, str]) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message="Validation failed",
            status_code=400,
            details=violations,
        )

    @property
    def violations(self) -> dict[str, str]:
        return dict(self.details or {})


class InvalidReferenceError(AppException):
    """A referenced entity does not exist."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_REFERENCE,
            message=message,
            status_code=400,
            details=details,
        )


class NotFoundError(AppException):
    """An entity expected to exist was not found."""

    def __init__(self, error_code: ErrorCode, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=404,
            details=details,
        )


class ConflictError(AppException):
    """A uniqueness rule would be violated."""

    def __init__(self, error_code: ErrorCode, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=409,
            details=details,
        )


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, user_id: str = "", username: str = "") -> None:
        if username:
            message = f"User not found with username: {username}"
            details = {"username": username}
        else:
            message = f"User not found with id: {user_id}"
            details = {"user_id": user_id}
        super().__init__(ErrorCode.USER_NOT_FOUND, message, details)


class TodoNotFoundError(NotFoundError):
    """Todo not found."""

    def __init__(self, todo_id: str) -> None:
        super().__init__(
            ErrorCode.TODO_NOT_FOUND,
            f"Todo not found with id: {todo_id}",
            {"todo_id": todo_id},
        )


class OwnerNotFoundError(InvalidReferenceError):
    """The owner referenced by a new todo does not exist."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            f"User not found with id: {user_id}",
            {"user_id": user_id},
        )


class UsernameTakenError(ConflictError):
    """Username is already used by another user."""

    def __init__(self, username: str) -> None:
        super().__init__(
            ErrorCode.USERNAME_TAKEN,
            f"Username already exists: {username}",
            {"username": username},
        )


class EmailTakenError(ConflictError):
    """Email is already used by another user."""

    def __init__(self, email: str) -> None:
        super().__init__(
            ErrorCode.EMAIL_TAKEN,
            f"Email already exists: {email}",
            {"email": email},
        )
