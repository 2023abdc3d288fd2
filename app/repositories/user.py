"""User repository for database operations."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.sql.expression import ColumnElement

from app.models.user import UserDB
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserDB]):
    """
    Repository for User database operations.

    Besides lookups, it maintains each user's owned-blog list. Callers run
    those changes in the same session as the blog write they mirror.
    """

    model = UserDB
    id_field = "uuid"

    async def create(
        self,
        username: str,
        password_hash: str,
        name: str | None = None,
    ) -> UserDB:
        """
        Create a new user in the database.

        Args:
            username: Unique username
            password_hash: Already computed password hash
            name: Optional display name

        Returns:
            UserDB: Created user database model

        Raises:
            DuplicateEntryError: If the username already exists
            DatabaseError: For other database errors
        """
        db_user = UserDB(username=username, password_hash=password_hash, name=name)
        return await self._add_and_refresh(db_user)

    async def get_by_username(self, username: str) -> UserDB | None:
        """
        Get user by username.

        Args:
            username: Username to search for

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(
            select(UserDB).where(cast(ColumnElement[bool], UserDB.username == username)),
        )
        return result.scalar_one_or_none()

    async def get_for_update(self, user_id: UUID) -> UserDB | None:
        """
        Load a user with its row locked until the transaction ends.

        The row is re-read even when the user is already in the session, so
        ``blogs`` reflects what concurrent transactions have committed.
        """
        statement = (
            select(UserDB)
            .where(cast(ColumnElement[bool], UserDB.uuid == user_id))
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def add_blog(self, user: UserDB, blog_id: UUID) -> UserDB:
        """Append ``blog_id`` to the user's owned-blog list."""
        # Reassign so the JSON column is seen as changed
        user.blogs = [*user.blogs, str(blog_id)]
        user.updated_at = datetime.now(tz=UTC)
        return await self._add_and_refresh(user)

    async def remove_blog(self, user: UserDB, blog_id: UUID) -> UserDB:
        """Remove ``blog_id`` from the user's owned-blog list."""
        user.blogs = [bid for bid in user.blogs if bid != str(blog_id)]
        user.updated_at = datetime.now(tz=UTC)
        return await self._add_and_refresh(user)
