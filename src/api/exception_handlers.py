"""Exception handlers for the FastAPI application.

Every failure leaving a route goes through ``classify_exception``, which maps
it onto the error taxonomy and the JSON body the clients expect:

- ``{"error": "..."}`` for single-message errors
- ``{"error": "Validation failed", "violations": {field: message}}`` for
  field-level validation failures
"""

from typing import Any, Sequence

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.exceptions import AppException, ErrorCode, ValidationFailedError

logger = structlog.get_logger()


def violations_from_errors(errors: Sequence[Any]) -> dict[str, str]:
    """Collapse pydantic errors into a field -> message map.

    The field is the last element of the error location; several messages
    for the same field are joined with "; ".
    """
    violations: dict[str, str] = {}
    for error in errors:
        loc = error.get("loc") or ("request",)
        field = str(loc[-1])
        message = error.get("msg", "Invalid value")
        if field in violations:
            violations[field] = f"{violations[field]}; {message}"
        else:
            violations[field] = message
    return violations


def classify_exception(exc: Exception) -> tuple[int, dict[str, Any]]:
    """Map any exception to a status code and response body."""
    if isinstance(exc, ValidationFailedError):
        return exc.status_code, {"error": exc.message, "violations": exc.violations}
    if isinstance(exc, AppException):
        return exc.status_code, {"error": exc.message}
    if isinstance(exc, RequestValidationError):
        return classify_exception(ValidationFailedError(violations_from_errors(exc.errors())))
    if isinstance(exc, StarletteHTTPException):
        return exc.status_code, {"error": str(exc.detail)}
    if isinstance(exc, SQLAlchemyError):
        return 500, {"error": "Database error"}

    message = "An unexpected error occurred"
    if not settings.is_production and str(exc):
        message = str(exc)
    return 500, {"error": message}


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle custom application exceptions."""
        logger.warning(
            "app_exception",
            error_code=exc.error_code.value,
            message=exc.message,
        )
        status_code, content = classify_exception(exc)
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions from FastAPI/Starlette."""
        status_code, content = classify_exception(exc)
        return JSONResponse(status_code=status_code, content=content, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request validation errors as 400 with a violation map."""
        logger.info("validation_error", errors=exc.errors())
        status_code, content = classify_exception(exc)
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(
        request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        """Handle storage errors without leaking driver details."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "database_error",
            error_code=ErrorCode.DATABASE_ERROR.value,
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )
        status_code, content = classify_exception(exc)
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )
        status_code, content = classify_exception(exc)
        return JSONResponse(status_code=status_code, content=content)
