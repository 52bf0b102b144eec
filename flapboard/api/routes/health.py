"""Health routes - Liveness check."""

from datetime import datetime, timezone

from fastapi import APIRouter

from flapboard.schemas.api import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
def health():
    """
    Health check endpoint for load balancer and Docker health checks.

    Does not contact the upstream feeds.
    """
    return HealthResponse(status="healthy", timestamp=datetime.now(timezone.utc))
