"""Auth endpoints: register, login and the caller's own profile."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from app.api.deps import get_auth_service, get_current_user
from app.core.rate_limit import auth_limit, limiter
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    UserPublic,
)
from app.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
@limiter.limit(auth_limit)
def register(
    request: Request,
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserPublic:
    """Create an account. Returns the new user without any credential data."""
    return service.register(body)


@router.post("/login", response_model=LoginResponse)
@limiter.limit(auth_limit)
def login(
    request: Request,
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT and the user.
    Include the token in the Authorization header as: Bearer <token>
    """
    return service.login(body.username, body.password)


@router.get("/profile", response_model=UserPublic)
def get_profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserPublic:
    return service.get_profile(current_user.id)


@router.put("/profile", response_model=UserPublic)
def update_profile(
    body: ProfileUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserPublic:
    """Update display name and/or picture URL. Send null to clear a field."""
    return service.update_profile(current_user.id, body)
