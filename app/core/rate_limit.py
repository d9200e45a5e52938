"""Per-client request rate limits (slowapi, keyed by remote address)."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import get_settings


def auth_limit() -> str:
    """Limit string for register/login, read at request time so prod/dev switches apply."""
    return get_settings().auth_rate_limit


limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[get_settings().RATE_LIMIT_GENERAL],
    enabled=get_settings().RATE_LIMIT_ENABLED,
)
