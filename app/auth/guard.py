"""Bearer token authentication."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.dependencies import TokenManagerDep, UserRepoDep
from app.errors import MissingTokenError, UserNotFoundError
from app.models import UserDB
from app.monitoring import get_logger

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False, description="Token from POST /api/login")


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    token_manager: TokenManagerDep,
    user_repo: UserRepoDep,
) -> UserDB:
    """
    Resolve the bearer token of the request to a live user.

    Parameters
    ----------
    credentials : HTTPAuthorizationCredentials | None
        Parsed ``Authorization`` header, ``None`` when absent or not a bearer scheme.
    token_manager : TokenManager
        Verifier holding the signing secret.
    user_repo : UserRepository
        Repository used to load the user named by the token.

    Returns
    -------
    UserDB
        Current authenticated user.

    Raises
    ------
    MissingTokenError
        If the request carries no bearer token.
    InvalidTokenError
        If the token fails verification (``TokenExpiredError`` when expired).
    UserNotFoundError
        If the token names a user that no longer exists.
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError

    token_data = token_manager.verify(credentials.credentials)

    user = await user_repo.get_by_id(token_data.user_id)
    if not user:
        logger.info(f"Token for removed user {token_data.user_id} rejected")
        raise UserNotFoundError

    return user


CurrentUserDep = Annotated[UserDB, Depends(get_current_user)]
