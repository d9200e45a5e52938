"""Register, login and profile flows on top of the credential store, password hashing and tokens."""

import logging
from datetime import UTC, datetime

from app.core.exceptions import ConflictError, DatabaseError, NotFoundError, UnauthorizedError
from app.core.security import BCRYPT_ROUNDS, burn_verification_time, hash_password, verify_password
from app.core.tokens import TokenConfig, issue_token
from app.models.user import STATUS_ACTIVE
from app.schemas.auth import LoginResponse, ProfileUpdateRequest, RegisterRequest, UserPublic
from app.services.user_store import USERNAME_TAKEN, UserStore

logger = logging.getLogger(__name__)

# Same text for unknown username and wrong password.
INVALID_CREDENTIALS = "Invalid credentials"
ACCOUNT_INACTIVE = "Account is not active"
USER_NOT_FOUND = "User not found"

# Columns update_profile may touch; anything else is ignored.
PROFILE_FIELDS = frozenset({"display_name", "picture_url"})


class AuthService:
    """
    Account flows. Every user leaving this class is a UserPublic, which has
    no credential field.
    """

    def __init__(
        self,
        store: UserStore,
        token_config: TokenConfig,
        default_role_name: str = "User",
        bcrypt_rounds: int = BCRYPT_ROUNDS,
    ) -> None:
        self.store = store
        self.token_config = token_config
        self.default_role_name = default_role_name
        self.bcrypt_rounds = bcrypt_rounds

    def register(self, body: RegisterRequest) -> UserPublic:
        """Create an account with the default role; ConflictError if the username is taken."""
        # Fast path for a friendly error; the unique index is the real guard.
        if self.store.find_by_username(body.username) is not None:
            raise ConflictError(USERNAME_TAKEN)

        role = self.store.find_role_by_name(self.default_role_name)
        if role is None:
            logger.warning(
                "Default role missing; registering user without a role",
                extra={"role_name": self.default_role_name},
            )
        user = self.store.create(
            username=body.username,
            password_hash=hash_password(body.password, rounds=self.bcrypt_rounds),
            role=role,
            status=STATUS_ACTIVE,
            display_name=body.display_name,
            picture_url=str(body.picture_url) if body.picture_url is not None else None,
        )
        logger.info("User registered", extra={"user_id": user.id, "username": user.username})
        return UserPublic.model_validate(user)

    def login(self, username: str, password: str) -> LoginResponse:
        """Verify credentials and issue a bearer token."""
        user = self.store.find_by_username(username)
        if user is None:
            burn_verification_time(password)
            logger.info("Login failed", extra={"username": username})
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not verify_password(password, user.password_hash):
            logger.info("Login failed", extra={"username": username})
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if user.status != STATUS_ACTIVE:
            logger.info("Login refused for inactive account", extra={"user_id": user.id})
            raise UnauthorizedError(ACCOUNT_INACTIVE)

        token = issue_token(
            self.token_config,
            user_id=user.id,
            username=user.username,
            role=user.role_name,
        )
        public = UserPublic.model_validate(user)

        try:
            user = self.store.update(user.id, {"last_login_at": datetime.now(UTC)})
            public = UserPublic.model_validate(user)
        except (DatabaseError, NotFoundError):
            logger.warning("Could not record login time", extra={"user_id": public.id})

        logger.info("User logged in", extra={"user_id": public.id, "username": public.username})
        return LoginResponse(
            token=token,
            token_type="bearer",
            expires_in=self.token_config.expires_in_seconds,
            user=public,
        )

    def get_profile(self, user_id: int) -> UserPublic:
        user = self.store.find_by_id(user_id)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND)
        return UserPublic.model_validate(user)

    def update_profile(self, user_id: int, body: ProfileUpdateRequest) -> UserPublic:
        """Apply allow-listed profile fields; NotFoundError if the user is gone."""
        changes = {k: v for k, v in body.changes().items() if k in PROFILE_FIELDS}
        if not changes:
            return self.get_profile(user_id)
        user = self.store.update(user_id, changes)
        logger.info(
            "User profile updated",
            extra={"user_id": user_id, "fields": sorted(changes)},
        )
        return UserPublic.model_validate(user)
