"""
Blog service.

Keeps each blog and its owner's ``blogs`` list in step: every operation
that writes both runs them in the request session and commits them together.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.permissions import authorize_ownership
from app.errors import RecordNotFoundError, UserNotFoundError
from app.models import BlogDB, UserDB
from app.monitoring import get_logger
from app.repositories import BlogRepository, UserRepository
from app.repositories.base import parse_record_id
from app.schemas.blog import BlogCreate, BlogResponse, BlogUpdate

logger = get_logger(__name__)


class BlogService:
    """Service for listing and changing blogs."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.blog_repo = BlogRepository(session)
        self.user_repo = UserRepository(session)

    async def list_blogs(self) -> list[BlogResponse]:
        """Return every blog with its owner populated."""
        blogs = await self.blog_repo.get_all()
        owners = await self.user_repo.get_by_ids({blog.user_id for blog in blogs})
        owners_by_id = {owner.uuid: owner for owner in owners}
        return [BlogResponse.from_db(blog, owners_by_id.get(blog.user_id)) for blog in blogs]

    async def get_blog(self, blog_id: str) -> BlogDB:
        """
        Load a blog by the identifier given by a client.

        Raises:
            InvalidIdError: If ``blog_id`` is not a well-formed identifier
            RecordNotFoundError: If no blog has that identifier
        """
        record_id = parse_record_id(blog_id)
        blog = await self.blog_repo.get_by_id(record_id)
        if not blog:
            raise RecordNotFoundError(detail="blog not found")
        return blog

    async def _lock_owner(self, user: UserDB) -> UserDB:
        """Re-read ``user`` under a row lock before its ``blogs`` list is rewritten."""
        owner = await self.user_repo.get_for_update(user.uuid)
        if not owner:
            raise UserNotFoundError
        return owner

    async def create(self, blog_in: BlogCreate, user: UserDB) -> BlogResponse:
        """
        Create a blog owned by ``user`` and record it on the user.

        Returns:
            BlogResponse: The created blog with its owner populated
        """
        try:
            owner = await self._lock_owner(user)
            blog = await self.blog_repo.create(blog_in, user_id=owner.uuid)
            await self.user_repo.add_blog(owner, blog.id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(f"Blog {blog.id} created by {owner.username}")
        return BlogResponse.from_db(blog, owner)

    async def remove(self, blog_id: str, user: UserDB) -> None:
        """
        Delete a blog and drop it from its owner's list.

        Raises:
            InvalidIdError: If ``blog_id`` is malformed
            RecordNotFoundError: If the blog does not exist
            NotOwnerError: If ``user`` did not create the blog
        """
        blog = await self.get_blog(blog_id)
        authorize_ownership(user, blog, "delete")

        try:
            owner = await self._lock_owner(user)
            await self.blog_repo.delete(blog)
            await self.user_repo.remove_blog(owner, blog.id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(f"Blog {blog.id} deleted by {user.username}")

    async def update(self, blog_id: str, blog_update: BlogUpdate, user: UserDB) -> BlogResponse:
        """
        Replace the supplied fields of a blog.

        Raises:
            InvalidIdError: If ``blog_id`` is malformed
            RecordNotFoundError: If the blog does not exist
            NotOwnerError: If ``user`` did not create the blog
        """
        blog = await self.get_blog(blog_id)
        authorize_ownership(user, blog, "update")

        try:
            blog = await self.blog_repo.update(blog, blog_update)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        return BlogResponse.from_db(blog, user)
