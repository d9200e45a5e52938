"""HTTP middleware: request logging and the app-wide middleware stack."""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import Settings

logger = logging.getLogger("app.request")

# Paths not logged in prod (load balancer health checks).
QUIET_PATHS = frozenset(
    {"/health", "/api/health", "/api/health/", "/api/health/live", "/api/health/ready"}
)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with status and timing."""

    def __init__(self, app, skip_paths: frozenset[str] = frozenset()) -> None:
        super().__init__(app)
        self.skip_paths = skip_paths

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.url.path in self.skip_paths:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        try:
            response = await call_next(request)
        except Exception:
            # The 500 handler logs the traceback.
            logger.debug(
                "Request failed",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "client_ip": client_ip,
                    "process_time_ms": round((time.perf_counter() - start_time) * 1000, 2),
                },
            )
            raise

        user = getattr(request.state, "user", None)
        logger.info(
            "%s %s %s",
            request.method,
            request.url.path,
            response.status_code,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "client_ip": client_ip,
                "user": user.username if user is not None else "anonymous",
                "process_time_ms": round((time.perf_counter() - start_time) * 1000, 2),
            },
        )
        return response


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Install middleware; the last one added runs first."""
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(
        RequestLoggingMiddleware,
        skip_paths=QUIET_PATHS if settings.APP_ENV == "prod" else frozenset(),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
