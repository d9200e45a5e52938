"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

from typing import Annotated

from fastapi import Depends, FastAPI

from app.api import router as api_router
from app.api.deps import get_optional_user
from app.core.config import settings
from app.core.exceptions import register_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.core.rate_limit import limiter
from app.schemas.auth import CurrentUser

configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="UserAuth API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.state.limiter = limiter
register_exception_handlers(app)
setup_middleware(app, settings)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def root(
    user: Annotated[CurrentUser | None, Depends(get_optional_user)],
) -> dict[str, str | None]:
    """Root route; minimal payload for discovery. Reports the caller when a valid token is sent."""
    return {
        "message": "UserAuth API",
        "authenticated_as": user.username if user is not None else None,
    }
