"""Health check endpoints with optional database connectivity check."""

import time

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse, PingResponse

router = APIRouter()

_started_at = time.monotonic()


@router.get("", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        version=settings.APP_VERSION,
        uptime=round(time.monotonic() - _started_at, 3),
        database=db_status,
    )


@router.get("/ping", response_model=PingResponse)
def ping() -> PingResponse:
    """Liveness probe; never touches the database."""
    return PingResponse()
