# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# This must happen before app settings are imported anywhere
os.environ["ENVIRONMENT"] = "testing"
os.environ["LOG_TO_FILE"] = "false"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from uuid import uuid4

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr
from pytest import fixture
from sqlalchemy import select

from app.configs import Settings
from app.db import Database
from app.main import create_app
from app.managers import PasswordHasher, TokenManager
from app.managers.rate_limiter import limiter
from app.models import BlogDB, UserDB

TEST_SECRET_KEY = "test-secret-key"  # noqa: S105

INITIAL_BLOGS = [
    {
        "title": "Test Blog 1",
        "author": "Test Author 1",
        "url": "http://www.testblog1.com",
        "likes": 1,
    },
    {
        "title": "Test Blog 2",
        "author": "Test Author 2",
        "url": "http://www.testblog2.com",
        "likes": 2,
    },
]


@fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing at a fresh SQLite file per test."""
    return Settings(
        ENVIRONMENT="testing",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        SECRET_KEY=SecretStr(TEST_SECRET_KEY),
        PASSWORD_SECURITY_LEVEL="low",
        ACCESS_TOKEN_EXPIRE_MINUTES=60,
        LOG_TO_FILE=False,
    )


@fixture
async def app(test_settings: Settings) -> AsyncGenerator[FastAPI]:
    """Application with its tables created."""
    application = create_app(test_settings)
    await application.state.database.init()
    yield application
    await application.state.database.close()


@fixture
def database(app: FastAPI) -> Database:
    return app.state.database


@fixture
def password_hasher(app: FastAPI) -> PasswordHasher:
    return app.state.password_hasher


@fixture
def token_manager(app: FastAPI) -> TokenManager:
    return app.state.token_manager


async def _create_user(
    database: Database,
    password_hasher: PasswordHasher,
    username: str,
    name: str,
    password: str,
    blogs: list[dict] | None = None,
) -> UserDB:
    async with database.transaction() as session:
        user = UserDB(username=username, name=name, password_hash=password_hasher.hash(password))
        session.add(user)
        await session.flush()

        db_blogs = [BlogDB(user_id=user.uuid, **blog) for blog in blogs or []]
        session.add_all(db_blogs)
        await session.flush()

        user.blogs = [str(blog.id) for blog in db_blogs]
    return user


@fixture
async def root_user(database: Database, password_hasher: PasswordHasher) -> UserDB:
    """The seeded ``root`` user owning the two initial blogs."""
    return await _create_user(
        database,
        password_hasher,
        username="root",
        name="Superuser",
        password="sekret",  # noqa: S106
        blogs=INITIAL_BLOGS,
    )


@fixture
async def other_user(database: Database, password_hasher: PasswordHasher) -> UserDB:
    """A second user owning nothing."""
    return await _create_user(
        database,
        password_hasher,
        username="hellas",
        name="Arto Hellas",
        password="salainen",  # noqa: S106
    )


@fixture
def auth_headers(token_manager: TokenManager, root_user: UserDB) -> dict[str, str]:
    """Create auth headers with a valid access token for ``root``."""
    token = token_manager.issue(user_id=root_user.uuid, username=root_user.username)
    return {"Authorization": f"Bearer {token}"}


@fixture
def other_auth_headers(token_manager: TokenManager, other_user: UserDB) -> dict[str, str]:
    """Create auth headers with a valid access token for ``hellas``."""
    token = token_manager.issue(user_id=other_user.uuid, username=other_user.username)
    return {"Authorization": f"Bearer {token}"}


@fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    limiter.enabled = False
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    limiter.enabled = True


@fixture
def blogs_in_db(database: Database) -> Callable[[], Awaitable[list[BlogDB]]]:
    """Return a reader of every stored blog."""

    async def read() -> list[BlogDB]:
        async with database.transaction() as session:
            result = await session.execute(select(BlogDB))
            return list(result.scalars().all())

    return read


@fixture
def users_in_db(database: Database) -> Callable[[], Awaitable[list[UserDB]]]:
    """Return a reader of every stored user."""

    async def read() -> list[UserDB]:
        async with database.transaction() as session:
            result = await session.execute(select(UserDB))
            return list(result.scalars().all())

    return read


@fixture
def non_existing_id() -> str:
    """A well-formed id that no blog has."""
    return str(uuid4())
