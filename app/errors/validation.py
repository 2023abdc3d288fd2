"""Custom validation error handling for FastAPI."""

from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from app.errors.base import BaseAppError
from app.monitoring import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)

VALUE_ERROR_PREFIX = "Value error, "


class ValidationError(BaseAppError):
    """Rejected input, reported before any persistence attempt."""

    def __init__(
        self,
        detail: str = "Validation failed",
        errors: list[dict] | None = None,
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)
        self.errors = errors or []


class UsernameTakenError(ValidationError):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str) -> None:
        field_error = {
            "field": "username",
            "message": "expected `username` to be unique",
            "type": "unique",
        }
        super().__init__(
            detail=f"User validation failed: username: expected `username` to be unique, "
            f"'{username}' is taken",
            errors=[field_error],
        )


def describe_error(error: dict[str, Any]) -> dict[str, Any]:
    """
    Turn one pydantic error entry into a field-level message.

    Args:
        error: An entry of ``RequestValidationError.errors()``.

    Returns:
        Dict with ``field``, ``message`` and ``type`` keys. Raw input values
        are never echoed back since they may hold credentials.
    """
    # Skip the location root ('body', 'path', 'query')
    field = ".".join(str(loc) for loc in error.get("loc", [])[1:])
    error_type = error.get("type", "validation_error")
    msg = str(error.get("msg", "Invalid value")).removeprefix(VALUE_ERROR_PREFIX)
    ctx = error.get("ctx") or {}

    if error_type == "missing":
        message = f"`{field}` is required"
    elif error_type == "string_too_short" and "min_length" in ctx:
        message = f"`{field}` is shorter than the minimum allowed length ({ctx['min_length']})"
    elif field:
        message = f"`{field}`: {msg}"
    else:
        message = msg

    return {"field": field, "message": message, "type": error_type}


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle request validation errors with a uniform 400 response.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with ``error`` (joined messages) and ``errors``.
    """
    exec_error = cast(RequestValidationError, exc)
    formatted_errors = [describe_error(error) for error in exec_error.errors()]
    summary = "; ".join(error["message"] for error in formatted_errors)

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {summary}",
    )

    return ORJSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "error": summary or "Validation failed",
            "errors": formatted_errors,
        },
    )
