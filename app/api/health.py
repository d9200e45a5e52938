"""Health, liveness and readiness endpoints."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse, LivenessResponse

router = APIRouter()


def _db_status(db: Session) -> str:
    return "connected" if check_db_connected(db) else "disconnected"


@router.get("", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Always 200; used by monitoring dashboards.
    """
    return HealthResponse(status="ok", environment=settings.APP_ENV, database=_db_status(db))


@router.get("/live", response_model=LivenessResponse)
def get_live() -> LivenessResponse:
    """Process is up. Does not touch the database."""
    return LivenessResponse()


@router.get("/ready", response_model=HealthResponse)
def get_ready(response: Response, db: Session = Depends(get_db)) -> HealthResponse:
    """Ready to serve traffic: 503 while the database is unreachable."""
    database = _db_status(db)
    if database != "connected":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(
            status="unavailable", environment=settings.APP_ENV, database=database
        )
    return HealthResponse(status="ok", environment=settings.APP_ENV, database=database)
