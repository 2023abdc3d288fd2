"""
Password hashing module using Argon2 with passlib's CryptContext.

This module provides secure password hashing and verification using Argon2id,
which is considered one of the most secure password hashing algorithms available.
"""

from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext
from passlib.exc import InternalBackendError

from app.configs import CONFIG_MAP
from app.errors import PasswordHashingError
from app.monitoring import get_logger

logger = get_logger(__name__)


class PasswordHasher:
    """
    A secure password hashing and verification manager using Argon2id algorithm.

    This class wraps passlib's CryptContext to provide:
    - Secure password hashing with Argon2id
    - Password verification
    - A dummy verification for unknown users, keeping login timing uniform
    """

    def __init__(self, level: str = "medium") -> None:
        """
        Initialize the PasswordHasher with Argon2id as the primary scheme.

        Args:
            level: Security level, a key of ``CONFIG_MAP``
        """
        if level not in CONFIG_MAP:
            mssg = f"Unknown password security level: {level}"
            raise ValueError(mssg)

        self.level = level
        self.pwd_context = CryptContext(
            schemes=[
                "argon2",
                "pbkdf2_sha256",
            ],  # argon2 as primary, pbkdf2 for fallback
            deprecated="pbkdf2_sha256",
            argon2__memory_cost=CONFIG_MAP[level].memory_cost,
            argon2__time_cost=CONFIG_MAP[level].time_cost,
            argon2__parallelism=CONFIG_MAP[level].parallelism,
        )
        logger.info(f"PasswordHasher initialized with Argon2id on level {self.level}")

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password using Argon2id.

        Args:
            password: The plaintext password to hash

        Returns:
            str: The hashed password in Argon2id format

        Raises:
            ValueError: If password is empty
            PasswordHashingError: If hashing fails

        Example:
            >>> hasher = PasswordHasher("low")
            >>> hashed = hasher.hash("sekret")
            >>> print(hashed)  # $argon2id$v=19$m=8192,t=1,p=1$...
        """
        if not password:
            msg = "Password cannot be empty"
            raise ValueError(msg) from None

        try:
            hashed_password = self.pwd_context.hash(password)
        except (ValueError, InternalBackendError, UnicodeError) as e:
            logger.exception("Error hashing password")
            mssg = "Failed to hash password"
            raise PasswordHashingError(mssg) from e
        logger.debug(f"Password hashed successfully on level {self.level}")
        return hashed_password

    def verify(self, password: str, hashed_password: str) -> bool:
        """
        Verify a plaintext password against a hashed password.

        Args:
            password: The plaintext password to verify
            hashed_password: The hashed password to verify against

        Returns:
            bool: True if password matches, False otherwise

        Example:
            >>> hasher = PasswordHasher("low")
            >>> hashed = hasher.hash("sekret")
            >>> hasher.verify("sekret", hashed)
            True
            >>> hasher.verify("wrong", hashed)
            False
        """
        if not isinstance(hashed_password, str) or not hashed_password.strip():
            logger.warning("Invalid hash format provided")
            return False

        try:
            return self.pwd_context.verify(password, hashed_password)
        except (ValueError, TypeError):
            logger.exception("Stored hash is corrupted or invalid format")
            return False

    def dummy_verify(self) -> bool:
        """Spend the time of one verification without a real hash."""
        return self.pwd_context.dummy_verify()

    async def hash_password(self, password: str) -> str:
        """Hash ``password`` in the thread pool."""
        return await run_in_threadpool(self.hash, password)

    async def verify_password(self, password: str, hashed_password: str | None) -> bool:
        """
        Verify ``password`` in the thread pool.

        A missing hash still costs one dummy verification so a caller cannot
        tell unknown users from wrong passwords by response time.
        """
        if hashed_password is None:
            await run_in_threadpool(self.dummy_verify)
            return False
        return await run_in_threadpool(self.verify, password, hashed_password)
