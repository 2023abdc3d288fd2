"""Authentication and authorization errors."""

from starlette.status import HTTP_401_UNAUTHORIZED

from app.errors.base import BaseAppError

INVALID_CREDENTIALS_MESSAGE = "invalid username or password"


class UnauthorizedError(BaseAppError):
    """Base class for authentication and authorization errors."""

    def __init__(self, detail: str = "unauthorized") -> None:
        super().__init__(detail, HTTP_401_UNAUTHORIZED)


class MissingTokenError(UnauthorizedError):
    """Raised when the request carries no bearer token."""

    def __init__(self) -> None:
        super().__init__("token missing")


class InvalidTokenError(UnauthorizedError):
    """Raised when a token cannot be verified."""

    def __init__(self, detail: str = "token invalid") -> None:
        super().__init__(detail)


class TokenExpiredError(InvalidTokenError):
    """Raised when a token is past its expiry."""

    def __init__(self) -> None:
        super().__init__("token expired")


class UserNotFoundError(UnauthorizedError):
    """Raised when a verified token points at a user that no longer exists."""

    def __init__(self) -> None:
        super().__init__("user not found")


class InvalidCredentialsError(UnauthorizedError):
    """Raised when credentials are invalid. Same message for every cause."""

    def __init__(self) -> None:
        super().__init__(INVALID_CREDENTIALS_MESSAGE)


class NotOwnerError(UnauthorizedError):
    """Raised when the caller does not own the record it tries to change."""

    def __init__(self, action: str = "modify") -> None:
        super().__init__(f"only the creator can {action} this blog")
