"""Core application modules."""

from app.db.database import Database, get_session

__all__ = [
    "Database",
    "get_session",
]
