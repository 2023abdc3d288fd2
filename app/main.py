# app/main.py

"""Blog List Backend - blogs, user accounts and token authentication on FastAPI."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_200_OK, HTTP_503_SERVICE_UNAVAILABLE

from app.configs import Settings, settings
from app.db import Database
from app.errors import (
    BaseAppError,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.managers import PasswordHasher, TokenManager, limiter, rate_limit_exceeded_handler
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.routes import blog_router, login_router, user_router
from app.schemas import HealthCheckResponse
from app.utils.helpers import today_str


async def health_check(request: Request) -> ORJSONResponse:
    """
    Health check endpoint reporting database reachability.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        ``200`` with status details, or ``503`` when the database is unreachable.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"status": "ok", "version": "1.0.0", "timestamp": "2025-01-01 10:00:00", "database": "connected"}
    """
    database: Database = request.app.state.database
    is_connected = await database.ping()

    health = HealthCheckResponse(
        status="ok" if is_connected else "degraded",
        version=request.app.version,
        timestamp=today_str(),
        database="connected" if is_connected else "unreachable",
    )
    return ORJSONResponse(
        health.model_dump(),
        status_code=HTTP_200_OK if is_connected else HTTP_503_SERVICE_UNAVAILABLE,
    )


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """
    Build the application from an explicit settings object.

    The database handle, token manager and password hasher are constructed
    here and kept on ``app.state``; request dependencies read them from there.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.APP_NAME,
        description="REST API for blog posts and user accounts with token authentication",
        version=app_settings.VERSION,
        debug=app_settings.DEBUG,
        lifespan=lifespan,
        swagger_ui_parameters={
            "docExpansion": "none",
            "operationsSorter": "method",
        },
    )

    app.state.settings = app_settings
    app.state.database = Database(app_settings)
    app.state.token_manager = TokenManager.from_settings(app_settings)
    app.state.password_hasher = PasswordHasher(app_settings.PASSWORD_SECURITY_LEVEL)
    app.state.limiter = limiter

    configure_cors(app, app_settings)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(LoggingMiddleware)

    routes = [blog_router, user_router, login_router]
    _ = [app.include_router(router) for router in routes]

    errors = [
        (BaseAppError, app_exception_handler),
        (RateLimitExceeded, rate_limit_exceeded_handler),
        (RequestValidationError, validation_exception_handler),
        (StarletteHTTPException, http_exception_handler),
    ]
    _ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

    app.add_api_route(
        "/health",
        limiter.exempt(health_check),
        methods=["GET"],
        tags=["🩺 Health"],
        summary="Health check endpoint",
        response_model=HealthCheckResponse,
        response_class=ORJSONResponse,
        responses={
            200: {
                "content": {
                    "application/json": {
                        "example": {
                            "status": "ok",
                            "version": "1.0.0",
                            "timestamp": "2025-01-01 10:00:00",
                            "database": "connected",
                        },
                    },
                },
            },
            503: {"description": "Database unreachable"},
        },
        operation_id="health_check",
    )

    return app


app = create_app()
