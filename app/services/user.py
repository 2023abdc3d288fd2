"""User listing service."""

from itertools import chain

from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories import BlogRepository, UserRepository
from app.schemas.user import UserResponse


class UserService:
    """Read side of user accounts."""

    def __init__(self, session: AsyncSession) -> None:
        self.user_repo = UserRepository(session)
        self.blog_repo = BlogRepository(session)

    async def list_users(self) -> list[UserResponse]:
        """Return every user with their blogs populated, in the stored order."""
        users = await self.user_repo.get_all()
        blogs = await self.blog_repo.get_by_ids(set(chain.from_iterable(u.blogs for u in users)))
        return [UserResponse.from_db(user, blogs) for user in users]
