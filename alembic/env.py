"""
Alembic environment for the blog list schema.

The database URL comes from ``Settings``. A caller may hand in its own
settings through ``config.attributes["settings"]`` (the test suite does);
otherwise they are read from the environment. SQLite URLs are migrated in
batch mode so column changes work there too.
"""

from asyncio import run as asyncio_run
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel

from alembic import context
from app.configs import Settings

# Registers the users and blogs tables on SQLModel.metadata for autogenerate
from app.models import BlogDB, UserDB  # noqa: F401

config = context.config

settings: Settings = config.attributes.get("settings") or Settings()

# Embedded callers keep their own logging setup
if config.config_file_name is not None and "settings" not in config.attributes:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata


def _context_options() -> dict:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "compare_server_default": True,
        "render_as_batch": settings.is_sqlite,
    }


def run_migrations_offline() -> None:
    """Emit the migration SQL for ``settings.DATABASE_URL`` without connecting."""
    context.configure(
        url=settings.DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_context_options(),
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, **_context_options())

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Connect with the application's async driver and migrate."""
    connectable = create_async_engine(settings.DATABASE_URL, poolclass=pool.NullPool)

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio_run(run_migrations_online())
