# app/dependencies/dependencies.py

"""Application dependencies resolved from the application state."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import Database, get_session
from app.managers import PasswordHasher, TokenManager
from app.repositories import BlogRepository, UserRepository
from app.services import AuthService, BlogService, UserService

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_database(request: Request) -> Database:
    """Return the database built for this application."""
    return request.app.state.database


def get_token_manager(request: Request) -> TokenManager:
    """Return the token manager built for this application."""
    return request.app.state.token_manager


def get_password_hasher(request: Request) -> PasswordHasher:
    """Return the password hasher built for this application."""
    return request.app.state.password_hasher


DatabaseDep = Annotated[Database, Depends(get_database)]
TokenManagerDep = Annotated[TokenManager, Depends(get_token_manager)]
PasswordHasherDep = Annotated[PasswordHasher, Depends(get_password_hasher)]


def get_user_repository(session: SessionDep) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository bound to the request session.
    """
    return UserRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]


def get_auth_service(
    session: SessionDep,
    password_hasher: PasswordHasherDep,
    token_manager: TokenManagerDep,
) -> AuthService:
    """Dependency to get AuthService bound to the request session."""
    return AuthService(session, password_hasher, token_manager)


def get_blog_service(session: SessionDep) -> BlogService:
    """Dependency to get BlogService bound to the request session."""
    return BlogService(session)


def get_user_service(session: SessionDep) -> UserService:
    """Dependency to get UserService bound to the request session."""
    return UserService(session)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
