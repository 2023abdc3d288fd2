from app.errors.auth import (
    INVALID_CREDENTIALS_MESSAGE,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    NotOwnerError,
    TokenExpiredError,
    UnauthorizedError,
    UserNotFoundError,
)
from app.errors.base import (
    BaseAppError,
    app_exception_handler,
    create_exception_handler,
    http_exception_handler,
)
from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    InvalidIdError,
    RecordNotFoundError,
)
from app.errors.password_hasher import PasswordHashingError
from app.errors.validation import (
    UsernameTakenError,
    ValidationError,
    validation_exception_handler,
)

__all__ = [
    "INVALID_CREDENTIALS_MESSAGE",
    "BaseAppError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DuplicateEntryError",
    "InvalidCredentialsError",
    "InvalidIdError",
    "InvalidTokenError",
    "MissingTokenError",
    "NotOwnerError",
    "PasswordHashingError",
    "RecordNotFoundError",
    "TokenExpiredError",
    "UnauthorizedError",
    "UserNotFoundError",
    "UsernameTakenError",
    "ValidationError",
    "app_exception_handler",
    "create_exception_handler",
    "http_exception_handler",
    "validation_exception_handler",
]
