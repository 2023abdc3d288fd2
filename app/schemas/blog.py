"""
Blog schemas for the blog list API.

Request bodies are validated declaratively here so that a malformed blog is
rejected with a 400 before anything touches the database.
"""

from pydantic import BaseModel, ConfigDict, Field

from app.configs.settings import MAX_LIKES, MAX_NAME_LENGTH, MAX_TITLE_LENGTH, MAX_URL_LENGTH
from app.models import BlogDB, UserDB


class OwnerResponse(BaseModel):
    """Owner information embedded in blog responses (without sensitive data)."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="User ID")
    username: str
    name: str | None = None

    @classmethod
    def from_db(cls, user: UserDB) -> "OwnerResponse":
        return cls(id=str(user.uuid), username=user.username, name=user.name)


class BlogCreate(BaseModel):
    """Blog creation model (for request body - excludes auto-generated fields)."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(
        ...,
        min_length=1,
        max_length=MAX_TITLE_LENGTH,
        description="Blog title",
        examples=["React patterns"],
    )
    author: str | None = Field(
        default=None,
        max_length=MAX_NAME_LENGTH,
        description="Author of the linked post",
        examples=["Michael Chan"],
    )
    url: str = Field(
        ...,
        min_length=1,
        max_length=MAX_URL_LENGTH,
        description="Link to the post",
        examples=["https://reactpatterns.com/"],
    )
    likes: int = Field(default=0, ge=0, le=MAX_LIKES, description="Like count", examples=[7])


class BlogUpdate(BaseModel):
    """Blog update model. Only supplied fields are replaced."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    author: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)
    url: str | None = Field(default=None, min_length=1, max_length=MAX_URL_LENGTH)
    likes: int | None = Field(
        default=None,
        ge=0,
        le=MAX_LIKES,
        description="Like count",
        examples=[8],
    )


class BlogSummary(BaseModel):
    """Blog as listed inside a user response."""

    id: str = Field(..., description="Blog ID")
    title: str
    author: str | None = None
    url: str
    likes: int = 0

    @classmethod
    def from_db(cls, blog: BlogDB) -> "BlogSummary":
        return cls(
            id=str(blog.id),
            title=blog.title,
            author=blog.author,
            url=blog.url,
            likes=blog.likes,
        )


class BlogResponse(BlogSummary):
    """Blog response model with the owning user populated."""

    user: OwnerResponse | None = Field(default=None, description="Blog owner")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "title": "React patterns",
                "author": "Michael Chan",
                "url": "https://reactpatterns.com/",
                "likes": 7,
                "user": {
                    "id": "123e4567-e89b-12d3-a456-426614174000",
                    "username": "mluukkai",
                    "name": "Matti Luukkainen",
                },
            },
        },
    )

    @classmethod
    def from_db(cls, blog: BlogDB, owner: UserDB | None = None) -> "BlogResponse":
        return cls(
            id=str(blog.id),
            title=blog.title,
            author=blog.author,
            url=blog.url,
            likes=blog.likes,
            user=OwnerResponse.from_db(owner) if owner else None,
        )
