"""Ownership rules for blog mutation."""

from app.errors import NotOwnerError
from app.models import BlogDB, UserDB
from app.monitoring import get_logger

logger = get_logger(__name__)


def is_owner(user: UserDB, blog: BlogDB) -> bool:
    """Return True when ``user`` created ``blog``."""
    return blog.user_id == user.uuid


def authorize_ownership(user: UserDB, blog: BlogDB, action: str = "modify") -> None:
    """
    Allow the change only when ``user`` created ``blog``.

    Both deletion and update go through this check.

    Raises:
        NotOwnerError: If the blog belongs to someone else.
    """
    if not is_owner(user, blog):
        logger.warning(f"User {user.username} tried to {action} blog {blog.id} they do not own")
        raise NotOwnerError(action)
