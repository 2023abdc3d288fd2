# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    AuthServiceDep,
    BlogServiceDep,
    DatabaseDep,
    PasswordHasherDep,
    SessionDep,
    TokenManagerDep,
    UserRepoDep,
    UserServiceDep,
    get_auth_service,
    get_blog_service,
    get_database,
    get_password_hasher,
    get_token_manager,
    get_user_repository,
    get_user_service,
)

__all__ = [
    "AuthServiceDep",
    "BlogServiceDep",
    "DatabaseDep",
    "PasswordHasherDep",
    "SessionDep",
    "TokenManagerDep",
    "UserRepoDep",
    "UserServiceDep",
    "get_auth_service",
    "get_blog_service",
    "get_database",
    "get_password_hasher",
    "get_token_manager",
    "get_user_repository",
    "get_user_service",
]
