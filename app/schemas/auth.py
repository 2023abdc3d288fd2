from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, StringConstraints


class LoginRequest(BaseModel):
    """
    Login credentials. Both fields are optional so a missing one is a 401.

    The username is trimmed the way registration trims it; the password is not.
    """

    username: Annotated[str, StringConstraints(strip_whitespace=True)] | None = Field(
        default=None,
        examples=["root"],
    )
    password: str | None = Field(default=None, examples=["sekret"])


class LoginResponse(BaseModel):
    """Issued session token with the identity it belongs to."""

    token: str
    username: str
    name: str | None = None


class TokenData(BaseModel):
    """Token data schema for extracted token payload."""

    user_id: UUID
    username: str
    jti: str
    issued_at: datetime | None = None
    expires_at: datetime | None = None
