"""Authentication service handling registration and login."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import DuplicateEntryError, InvalidCredentialsError, UsernameTakenError
from app.managers.password_manager import PasswordHasher
from app.managers.token_manager import TokenManager
from app.models import UserDB
from app.monitoring import get_logger
from app.repositories import UserRepository
from app.schemas.auth import LoginResponse
from app.schemas.user import UserCreate

logger = get_logger(__name__)


class AuthService:
    """Service for registering users and issuing session tokens."""

    def __init__(
        self,
        session: AsyncSession,
        password_hasher: PasswordHasher,
        token_manager: TokenManager,
    ) -> None:
        """
        Initialize the auth service.

        Args:
            session: Database session of the current request
            password_hasher: Hasher used for storing and checking passwords
            token_manager: Issuer of access tokens
        """
        self.session = session
        self.user_repo = UserRepository(session)
        self.password_hasher = password_hasher
        self.token_manager = token_manager

    async def register(self, user_create: UserCreate) -> UserDB:
        """
        Register a new user account.

        Args:
            user_create: Validated registration data

        Returns:
            UserDB: Created user

        Raises:
            UsernameTakenError: If the username already exists
        """
        if await self.user_repo.get_by_username(user_create.username):
            raise UsernameTakenError(user_create.username)

        # Password presence is guaranteed by UserCreate validation
        password_hash = await self.password_hasher.hash_password(str(user_create.password))

        try:
            user = await self.user_repo.create(
                username=user_create.username,
                password_hash=password_hash,
                name=user_create.name,
            )
            await self.session.commit()
        except DuplicateEntryError as e:
            # Lost a race with a concurrent registration
            raise UsernameTakenError(user_create.username) from e

        logger.info(f"User {user.username} registered")
        return user

    async def authenticate_user(self, username: str | None, password: str | None) -> UserDB:
        """
        Authenticate a user by username and password.

        Args:
            username: User username
            password: User password

        Returns:
            UserDB: Authenticated user

        Raises:
            InvalidCredentialsError: If authentication fails, whatever the cause
        """
        user = await self.user_repo.get_by_username(username) if username else None

        if not user or not password:
            await self.password_hasher.verify_password(password or "", None)
            raise InvalidCredentialsError

        if not await self.password_hasher.verify_password(password, user.password_hash):
            raise InvalidCredentialsError

        return user

    async def login(self, username: str | None, password: str | None) -> LoginResponse:
        """
        Authenticate credentials and issue an access token.

        Returns:
            LoginResponse: Token with the username and display name it belongs to
        """
        user = await self.authenticate_user(username, password)
        token = self.token_manager.issue(user_id=user.uuid, username=user.username)
        logger.info(f"User {user.username} logged in")
        return LoginResponse(token=token, username=user.username, name=user.name)
