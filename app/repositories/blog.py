"""Blog repository for database operations."""

from datetime import UTC, datetime
from uuid import UUID

from app.models.blog import BlogDB
from app.repositories.base import BaseRepository
from app.schemas.blog import BlogCreate, BlogUpdate


class BlogRepository(BaseRepository[BlogDB]):
    """
    Repository for Blog database operations.

    This class implements the repository pattern for Blog entities,
    providing CRUD operations. It never touches the owner's blog list.
    """

    model = BlogDB

    async def create(self, blog: BlogCreate, user_id: UUID) -> BlogDB:
        """
        Create a new blog post owned by ``user_id``.

        Args:
            blog: Validated blog data
            user_id: UUID of the owning user

        Returns:
            BlogDB: Created blog database model
        """
        db_blog = BlogDB(
            user_id=user_id,
            title=blog.title,
            author=blog.author,
            url=blog.url,
            likes=blog.likes,
        )
        return await self._add_and_refresh(db_blog)

    async def update(self, db_blog: BlogDB, blog_update: BlogUpdate) -> BlogDB:
        """
        Replace the supplied fields of a loaded blog.

        Args:
            db_blog: Blog to update
            blog_update: Fields to replace; unset fields are kept

        Returns:
            BlogDB: Updated blog
        """
        update_data = blog_update.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            if key in {"title", "url", "likes"} and value is None:
                continue
            setattr(db_blog, key, value)

        db_blog.updated_at = datetime.now(tz=UTC)
        return await self._add_and_refresh(db_blog)

    async def delete(self, db_blog: BlogDB) -> None:
        """Delete a loaded blog."""
        await self._delete(db_blog)
