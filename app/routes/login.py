# app/routes/login.py

"""
Login Route.

Exchanges a username and password for a signed access token. Every failure
answers with the same message so callers cannot probe for usernames.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response

from app.dependencies import AuthServiceDep
from app.managers.rate_limiter import LOGIN_RATE_LIMIT, limiter
from app.schemas import LoginRequest, LoginResponse

router = APIRouter(prefix="/api/login", tags=["🔐 Authentication"])


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=LoginResponse,
    summary="Login for access token",
    description="Authenticate with username and password to obtain an access token.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "username": "mluukkai",
                        "name": "Matti Luukkainen",
                    },
                },
            },
        },
        401: {
            "description": "Unauthorized",
            "content": {
                "application/json": {"example": {"error": "invalid username or password"}},
            },
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {
                "application/json": {"example": {"error": "rate limit exceeded: 5 per 1 minute"}},
            },
        },
    },
    operation_id="auth_login",
)
@limiter.limit(LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    response: Response,
    credentials: Annotated[
        LoginRequest,
        Body(examples=[{"username": "mluukkai", "password": "salainen"}]),
    ],
    auth_service: AuthServiceDep,
) -> LoginResponse:
    """
    Login with username and password.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    credentials : LoginRequest
        Username and password.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    LoginResponse
        Token with the username and display name it was issued for.

    Raises
    ------
    InvalidCredentialsError
        If authentication fails.
    """
    return await auth_service.login(credentials.username, credentials.password)
