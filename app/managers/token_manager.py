"""Token manager for issuing and verifying JWT access tokens."""

from datetime import UTC, datetime, timedelta
from typing import Any, Self
from uuid import UUID, uuid4

from jose import ExpiredSignatureError, JWTError, jwt

from app.configs import Settings
from app.errors import InvalidTokenError, TokenExpiredError
from app.schemas.auth import TokenData

ACCESS_TOKEN_TYPE = "access"


class TokenManager:
    """
    Issues and verifies signed access tokens.

    The signing secret is held by the instance, not read from global
    settings, so separate applications (and tests) can use separate keys.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int | None = None,
        issuer: str | None = None,
        audience: str | None = None,
    ) -> None:
        if not secret_key:
            mssg = "secret_key must not be empty"
            raise ValueError(mssg)
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self.issuer = issuer
        self.audience = audience

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        return cls(
            secret_key=settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.ALGORITHM,
            expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
        )

    def issue(
        self,
        user_id: UUID,
        username: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """
        Create a new access token for a user.

        Args:
            user_id: User's UUID
            username: User's username
            expires_delta: Optional lifetime overriding ``expire_minutes``

        Returns:
            str: Encoded JWT access token
        """
        now = datetime.now(UTC)
        to_encode: dict[str, Any] = {
            "sub": str(user_id),
            "username": username,
            "jti": str(uuid4()),
            "iat": now,
            "type": ACCESS_TOKEN_TYPE,
        }
        if self.issuer:
            to_encode["iss"] = self.issuer
        if self.audience:
            to_encode["aud"] = self.audience

        if expires_delta is not None:
            to_encode["exp"] = now + expires_delta
        elif self.expire_minutes is not None:
            to_encode["exp"] = now + timedelta(minutes=self.expire_minutes)

        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenData:
        """
        Decode and validate an access token.

        Args:
            token: JWT token string

        Returns:
            TokenData: Decoded token data

        Raises:
            TokenExpiredError: If the token's ``exp`` has passed
            InvalidTokenError: If the signature, claims or type do not check out
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError from e
        except JWTError as e:
            raise InvalidTokenError from e

        user_id: str | None = payload.get("sub")
        username: str | None = payload.get("username")
        jti: str | None = payload.get("jti")
        token_type: str | None = payload.get("type")

        if not user_id or not username or not jti or token_type != ACCESS_TOKEN_TYPE:
            raise InvalidTokenError

        try:
            parsed_id = UUID(user_id)
        except ValueError as e:
            raise InvalidTokenError from e

        issued_at = payload.get("iat")
        expires_at = payload.get("exp")
        return TokenData(
            user_id=parsed_id,
            username=username,
            jti=jti,
            issued_at=datetime.fromtimestamp(issued_at, tz=UTC) if issued_at else None,
            expires_at=datetime.fromtimestamp(expires_at, tz=UTC) if expires_at else None,
        )
