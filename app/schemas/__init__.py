from app.schemas.auth import LoginRequest, LoginResponse, TokenData
from app.schemas.blog import BlogCreate, BlogResponse, BlogSummary, BlogUpdate, OwnerResponse
from app.schemas.health import HealthCheckResponse
from app.schemas.user import UserCreate, UserResponse

__all__ = [
    "BlogCreate",
    "BlogResponse",
    "BlogSummary",
    "BlogUpdate",
    "HealthCheckResponse",
    "LoginRequest",
    "LoginResponse",
    "OwnerResponse",
    "TokenData",
    "UserCreate",
    "UserResponse",
]
