"""
User schemas for registration and listing.

This module defines the request and response models for user accounts.
The password hash never appears in any response model.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from app.configs.settings import (
    MAX_NAME_LENGTH,
    MAX_USERNAME_LENGTH,
    MIN_PASSWORD_LENGTH,
    MIN_USERNAME_LENGTH,
)
from app.models import BlogDB, UserDB
from app.schemas.blog import BlogSummary

StrippedStr = Annotated[str, StringConstraints(strip_whitespace=True)]


class UserCreate(BaseModel):
    """
    User creation model (for request body - excludes auto-generated fields).

    Surrounding whitespace is trimmed from ``username`` and ``name`` only;
    the password is hashed exactly as sent.
    """

    username: StrippedStr = Field(
        ...,
        min_length=MIN_USERNAME_LENGTH,
        max_length=MAX_USERNAME_LENGTH,
        description="Username",
        examples=["mluukkai"],
    )
    name: StrippedStr | None = Field(
        default=None,
        max_length=MAX_NAME_LENGTH,
        description="Display name",
        examples=["Matti Luukkainen"],
    )
    password: str | None = Field(
        default=None,
        description="Password",
        examples=["salainen"],
    )

    @model_validator(mode="after")
    def validate_password(self) -> "UserCreate":
        """Validate password presence and length."""
        if self.password is None:
            mssg = "password missing"
            raise ValueError(mssg)
        if len(self.password) < MIN_PASSWORD_LENGTH:
            mssg = f"password must be at least {MIN_PASSWORD_LENGTH} characters long"
            raise ValueError(mssg)
        return self


class UserResponse(BaseModel):
    """User response model (without sensitive information)."""

    id: str = Field(..., description="User ID")
    username: str
    name: str | None = None
    blogs: list[BlogSummary] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "username": "mluukkai",
                "name": "Matti Luukkainen",
                "blogs": [
                    {
                        "id": "550e8400-e29b-41d4-a716-446655440000",
                        "title": "React patterns",
                        "author": "Michael Chan",
                        "url": "https://reactpatterns.com/",
                        "likes": 7,
                    },
                ],
            },
        },
    )

    @classmethod
    def from_db(cls, user: UserDB, blogs: list[BlogDB] | None = None) -> "UserResponse":
        """Build a response, listing ``blogs`` in the order of ``user.blogs``."""
        by_id = {str(blog.id): blog for blog in blogs or []}
        return cls(
            id=str(user.uuid),
            username=user.username,
            name=user.name,
            blogs=[BlogSummary.from_db(by_id[bid]) for bid in user.blogs if bid in by_id],
        )
