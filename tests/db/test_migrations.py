"""Tests for the Alembic migration chain."""

from collections.abc import Generator
from pathlib import Path

from pytest import fixture
from sqlalchemy import Engine, create_engine, inspect
from sqlmodel import SQLModel

from alembic import command
from alembic.config import Config
from app.configs import Settings
from app.models import BlogDB, UserDB  # noqa: F401

ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"


@fixture
def alembic_config(test_settings: Settings) -> Config:
    config = Config(str(ALEMBIC_INI))
    config.attributes["settings"] = test_settings
    return config


@fixture
def sync_engine(test_settings: Settings) -> Generator[Engine]:
    """Plain sqlite engine over the same file the migrations write."""
    engine = create_engine(test_settings.DATABASE_URL.replace("+aiosqlite", ""))
    yield engine
    engine.dispose()


def test_upgrade_creates_model_tables(alembic_config: Config, sync_engine: Engine) -> None:
    command.upgrade(alembic_config, "head")

    inspector = inspect(sync_engine)
    assert {"users", "blogs", "alembic_version"} <= set(inspector.get_table_names())

    for table in ("users", "blogs"):
        migrated = {column["name"] for column in inspector.get_columns(table)}
        modelled = {column.name for column in SQLModel.metadata.tables[table].columns}
        assert migrated == modelled

    username_index = next(
        index for index in inspector.get_indexes("users") if index["name"] == "ix_users_username"
    )
    assert username_index["unique"]


def test_downgrade_removes_tables(alembic_config: Config, sync_engine: Engine) -> None:
    command.upgrade(alembic_config, "head")
    command.downgrade(alembic_config, "base")

    tables = set(inspect(sync_engine).get_table_names())
    assert "users" not in tables
    assert "blogs" not in tables
