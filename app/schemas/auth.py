"""Request/response schemas for auth and user endpoints."""

import re
from datetime import datetime
from typing import Annotated

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    StringConstraints,
    field_validator,
)

from app.core.sanitize import SanitizedStr
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)

USERNAME_PATTERN = r"^[A-Za-z0-9_.@-]+$"
PASSWORD_SPECIALS = "@$!%*?&"
PICTURE_URL_MAX_LEN = 200
DISPLAY_NAME_MAX_LEN = 100

DisplayName = Annotated[SanitizedStr, StringConstraints(max_length=DISPLAY_NAME_MAX_LEN)]

_PASSWORD_RULES = (
    (re.compile(r"[a-z]"), "a lowercase letter"),
    (re.compile(r"[A-Z]"), "an uppercase letter"),
    (re.compile(r"\d"), "a number"),
    (re.compile(f"[{re.escape(PASSWORD_SPECIALS)}]"), f"a special character ({PASSWORD_SPECIALS})"),
)


def _picture_url(v: HttpUrl | None) -> str | None:
    if v is None:
        return None
    url = str(v)
    if len(url) > PICTURE_URL_MAX_LEN:
        raise ValueError(f"picture_url must not exceed {PICTURE_URL_MAX_LEN} characters")
    return url


class RegisterRequest(BaseModel):
    """New account: credentials plus optional profile fields."""

    model_config = ConfigDict(extra="forbid")

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LEN,
        max_length=USERNAME_MAX_LEN,
        pattern=USERNAME_PATTERN,
        description="Username (3-50 characters: letters, digits, _ . @ -)",
    )
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password (8-128 chars; upper, lower, digit and special character)",
    )
    display_name: DisplayName | None = None
    picture_url: HttpUrl | None = Field(default=None, description="Profile picture URL")

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        missing = [label for pattern, label in _PASSWORD_RULES if not pattern.search(v)]
        if missing:
            raise ValueError("Password must contain " + ", ".join(missing))
        return v

    @field_validator("picture_url", mode="after")
    @classmethod
    def validate_picture_url(cls, v: HttpUrl | None) -> HttpUrl | None:
        _picture_url(v)
        return v


class LoginRequest(BaseModel):
    """Credentials for login. Only presence is checked so wrong passwords reach the 401 path."""

    model_config = ConfigDict(extra="forbid")

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class ProfileUpdateRequest(BaseModel):
    """Mutable profile fields. Identity, role and password cannot be changed here."""

    model_config = ConfigDict(extra="forbid")

    display_name: DisplayName | None = None
    picture_url: HttpUrl | None = None

    @field_validator("picture_url", mode="after")
    @classmethod
    def validate_picture_url(cls, v: HttpUrl | None) -> HttpUrl | None:
        _picture_url(v)
        return v

    def changes(self) -> dict[str, str | None]:
        """Fields the client actually sent, with URLs as plain strings."""
        data = self.model_dump(exclude_unset=True)
        if "picture_url" in data:
            data["picture_url"] = _picture_url(self.picture_url)
        return data


class UserPublic(BaseModel):
    """User as returned by the API. Has no credential field by construction."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str | None = Field(default=None, validation_alias=AliasChoices("role_name", "role"))
    status: str
    display_name: str | None = None
    picture_url: str | None = None
    created_at: datetime | None = None
    last_login_at: datetime | None = None


class LoginResponse(BaseModel):
    """Bearer token and the authenticated user."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserPublic


class CurrentUser(BaseModel):
    """Authenticated identity taken from token claims."""

    id: int
    username: str
    role: str | None = None


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserPublic]
    pagination: Pagination
