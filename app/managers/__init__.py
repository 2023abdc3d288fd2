from app.managers.password_manager import PasswordHasher
from app.managers.rate_limiter import (
    LOGIN_RATE_LIMIT,
    REGISTER_RATE_LIMIT,
    limiter,
    rate_limit_exceeded_handler,
)
from app.managers.token_manager import TokenManager

__all__ = [
    "LOGIN_RATE_LIMIT",
    "REGISTER_RATE_LIMIT",
    "PasswordHasher",
    "TokenManager",
    "limiter",
    "rate_limit_exceeded_handler",
]
