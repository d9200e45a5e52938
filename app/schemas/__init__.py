"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    Pagination,
    ProfileUpdateRequest,
    RegisterRequest,
    UserPublic,
    UsersListResponse,
)
from app.schemas.health import HealthResponse, LivenessResponse

__all__ = [
    "CurrentUser",
    "HealthResponse",
    "LivenessResponse",
    "LoginRequest",
    "LoginResponse",
    "Pagination",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "UserPublic",
    "UsersListResponse",
]
