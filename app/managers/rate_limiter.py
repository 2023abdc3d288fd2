# app/managers/rate_limiter.py

"""Rate limiter configuration using slowapi."""

from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from app.configs import LimiterConfig
from app.monitoring import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)

LOGIN_RATE_LIMIT = "5/minute"
REGISTER_RATE_LIMIT = "10/minute"


def get_identifier(request: Request) -> str:
    """
    Get unique identifier for rate limiting.

    Keyed on the client address only. Headers the client controls, such as
    ``X-API-Key``, never select the bucket.

    Args:
        request: FastAPI request object.

    Returns:
        Unique identifier string.
    """
    remote_address = get_remote_address(request)
    return f"ip:{remote_address}"


limiter = Limiter(**LimiterConfig().model_dump(), key_func=get_identifier)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle rate limit exceeded exceptions.

    Args:
        request: FastAPI request object.
        exc: RateLimitExceeded exception.

    Returns:
        JSON response with error details.
    """
    http_exc = cast(RateLimitExceeded, exc)
    logger.warning(
        f"Rate limit exceeded for ip: {host(request)} at endpoint {request.url.path}",
    )
    return ORJSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content={"error": f"rate limit exceeded: {http_exc.detail}"},
    )
