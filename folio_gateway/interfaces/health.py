"""
Health and root routers.

Liveness endpoints for probes and for consumers checking that the
gateway is up. No business logic, no provider calls.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from folio_gateway.core.config import settings
from folio_gateway.interfaces.portfolio.schemas import HealthResponse, RootResponse

router = APIRouter(tags=["health"])


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns status, current server time and the listening port.",
)
def health_check() -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        port=settings.port,
    )


@router.get("/", response_model=RootResponse, summary="Service banner")
def root() -> RootResponse:
    """Return the service banner."""
    return RootResponse(
        message=settings.banner_message,
        status="running",
        port=settings.port,
    )
