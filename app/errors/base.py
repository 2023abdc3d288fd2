from collections.abc import Awaitable, Callable
from typing import Any, cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_404_NOT_FOUND, HTTP_500_INTERNAL_SERVER_ERROR

from app.monitoring import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail


def create_exception_handler(
    logger: Any,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    The response body always carries the cause under ``error``; any extra
    public attributes of the exception are merged in.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = HTTP_500_INTERNAL_SERVER_ERROR
        detail = "Internal Server Error"

        if hasattr(exc, "status_code"):
            status_code = exc.status_code
        if hasattr(exc, "detail"):
            detail = exc.detail

        logger.warning(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")

        content: dict[str, Any] = {"error": detail}
        content.update(
            {
                k: v
                for k, v in exc.__dict__.items()
                if k not in ("status_code", "detail") and not k.startswith("_")
            },
        )

        return ORJSONResponse(content=content, status_code=status_code)

    return handler


async def http_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Render framework HTTP errors (unknown route, bad method) as ``{"error": ...}``."""
    http_exc = cast(StarletteHTTPException, exc)
    detail = "unknown endpoint" if http_exc.status_code == HTTP_404_NOT_FOUND else http_exc.detail
    logger.info(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")
    return ORJSONResponse(
        content={"error": detail},
        status_code=http_exc.status_code,
        headers=getattr(http_exc, "headers", None),
    )


app_exception_handler = create_exception_handler(logger)
