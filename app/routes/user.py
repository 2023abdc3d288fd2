# app/routes/user.py

"""
User Routes.

Provides registration and listing of user accounts.

Summary
-------
Endpoints include:
  - Create user (registration)
  - Get all users (blogs populated)

Rate Limiting
-------------
Registration is limited per client IP address and documents
its `429` response.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from app.dependencies import AuthServiceDep, UserServiceDep
from app.managers.rate_limiter import REGISTER_RATE_LIMIT, limiter
from app.schemas import UserCreate, UserResponse

router = APIRouter(prefix="/api/users", tags=["👤 Users"])


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    status_code=HTTP_201_CREATED,
    summary="Register a new user",
    description="Create a user account. The password is stored only as a salted hash.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "id": "123e4567-e89b-12d3-a456-426614174000",
                        "username": "mluukkai",
                        "name": "Matti Luukkainen",
                        "blogs": [],
                    },
                },
            },
        },
        400: {
            "description": "Invalid registration data",
            "content": {
                "application/json": {
                    "example": {
                        "error": "User validation failed: username: expected `username` "
                        "to be unique, 'mluukkai' is taken",
                    },
                },
            },
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {
                "application/json": {
                    "example": {"error": "rate limit exceeded: 10 per 1 minute"},
                },
            },
        },
    },
    operation_id="users_create",
)
@limiter.limit(REGISTER_RATE_LIMIT)
async def create_user(
    request: Request,
    response: Response,
    user: Annotated[
        UserCreate,
        Body(
            examples=[
                {"username": "mluukkai", "name": "Matti Luukkainen", "password": "salainen"},
            ],
        ),
    ],
    auth_service: AuthServiceDep,
) -> UserResponse:
    """
    Register a new user.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    user : UserCreate
        Registration payload.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    UserResponse
        Created user without credentials.

    Raises
    ------
    UsernameTakenError
        If the username already exists.
    """
    db_user = await auth_service.register(user)
    return UserResponse.from_db(db_user)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[UserResponse],
    summary="List users",
    description="List every user with the blogs they created.",
    operation_id="users_list",
)
async def list_users(service: UserServiceDep) -> list[UserResponse]:
    """
    List all users.

    Returns
    -------
    list[UserResponse]
        Users with blog summaries, never password hashes.
    """
    return await service.list_users()
