"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from app.core.config import settings
from shared_schemas.media_service import HealthResponse

router = APIRouter(tags=["health"])

_started_at = time.monotonic()


@router.get("/health", response_model=HealthResponse)
@router.get("/api/health", response_model=HealthResponse, include_in_schema=False)
async def get_health_status():
    """
    Basic health check endpoint for container orchestration.

    No event token required. Returns service status, uptime and version.
    """
    return HealthResponse(
        status="ok",
        uptime=time.monotonic() - _started_at,
        version=settings.APP_VERSION
    )
