"""Request dependencies: services per request and bearer-token authentication."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.exceptions import ForbiddenError, UnauthorizedError
from app.core.tokens import TokenConfig, TokenFailure, verify_token
from app.models.role import ROLE_ADMIN
from app.schemas.auth import CurrentUser
from app.services.auth_service import AuthService
from app.services.user_store import UserStore

NO_TOKEN = "No token provided"
INVALID_TOKEN = "Invalid token"
TOKEN_EXPIRED = "Token expired"

# Declares the bearer scheme in OpenAPI; the header itself is parsed by authenticate().
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_config() -> TokenConfig:
    return get_settings().token_config()


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    return UserStore(db)


def get_auth_service(
    store: Annotated[UserStore, Depends(get_user_store)],
    token_config: Annotated[TokenConfig, Depends(get_token_config)],
) -> AuthService:
    settings = get_settings()
    return AuthService(
        store,
        token_config,
        default_role_name=settings.DEFAULT_ROLE_NAME,
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )


def authenticate(authorization: str | None, config: TokenConfig) -> CurrentUser:
    """
    Turn an Authorization header into the caller's identity.

    Raises UnauthorizedError with a distinct message for a missing token,
    an invalid one and an expired one.
    """
    scheme, _, token = (authorization or "").partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise UnauthorizedError(NO_TOKEN)

    result = verify_token(config, token)
    if result.failure is TokenFailure.EXPIRED:
        raise UnauthorizedError(TOKEN_EXPIRED)
    if result.claims is None:
        raise UnauthorizedError(INVALID_TOKEN)
    return CurrentUser(
        id=result.claims.user_id,
        username=result.claims.username,
        role=result.claims.role,
    )


def get_current_user(
    request: Request,
    config: Annotated[TokenConfig, Depends(get_token_config)],
    _bearer: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> CurrentUser:
    """Dependency: require a valid bearer token. Raises 401 otherwise."""
    user = authenticate(request.headers.get("Authorization"), config)
    request.state.user = user
    return user


def get_optional_user(
    request: Request,
    config: Annotated[TokenConfig, Depends(get_token_config)],
    _bearer: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> CurrentUser | None:
    """Dependency: identity if a valid token was sent, otherwise None. Never fails the request."""
    try:
        user = authenticate(request.headers.get("Authorization"), config)
    except UnauthorizedError:
        return None
    request.state.user = user
    return user


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with the Admin role. Raises 403 for others."""
    if current_user.role != ROLE_ADMIN:
        raise ForbiddenError("Admin access required")
    return current_user
