"""JWT issuance and verification against an explicit signing configuration."""

from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

import jwt
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

REQUIRED_CLAIMS = ("sub", "username", "iat", "exp")


class TokenConfig(BaseModel):
    """Signing key, algorithm and lifetime shared by issuer and verifier."""

    model_config = ConfigDict(frozen=True)

    secret: SecretStr
    algorithm: str = "HS256"
    expire_minutes: int = Field(default=10080, ge=1)

    @property
    def expires_in_seconds(self) -> int:
        return self.expire_minutes * 60


class TokenClaims(BaseModel):
    """Identity carried by a verified token."""

    user_id: int
    username: str
    role: str | None = None
    issued_at: datetime
    expires_at: datetime


class TokenFailure(str, Enum):
    """Why a presented token was rejected."""

    INVALID = "invalid"
    EXPIRED = "expired"


class TokenVerification(BaseModel):
    """Outcome of verify_token: exactly one of claims or failure is set."""

    claims: TokenClaims | None = None
    failure: TokenFailure | None = None

    @property
    def ok(self) -> bool:
        return self.claims is not None


def issue_token(
    config: TokenConfig,
    user_id: int,
    username: str,
    role: str | None,
    now: datetime | None = None,
) -> str:
    """Create a signed token for the user; `now` overrides the issue time."""
    issued_at = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "username": username,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=config.expire_minutes),
    }
    return jwt.encode(
        payload,
        config.secret.get_secret_value(),
        algorithm=config.algorithm,
    )


def verify_token(config: TokenConfig, token: str) -> TokenVerification:
    """
    Check signature, expiry and required claims.

    Never raises for a bad token; expired tokens are reported separately
    from every other kind of rejection.
    """
    try:
        payload = jwt.decode(
            token,
            config.secret.get_secret_value(),
            algorithms=[config.algorithm],
            options={"require": list(REQUIRED_CLAIMS)},
        )
    except jwt.ExpiredSignatureError:
        return TokenVerification(failure=TokenFailure.EXPIRED)
    except jwt.PyJWTError:
        return TokenVerification(failure=TokenFailure.INVALID)

    try:
        claims = TokenClaims(
            user_id=int(payload["sub"]),
            username=payload["username"],
            role=payload.get("role"),
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )
    except (TypeError, ValueError, ValidationError):
        return TokenVerification(failure=TokenFailure.INVALID)
    return TokenVerification(claims=claims)
