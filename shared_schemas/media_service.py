"""
Media Service API schemas.
Type-safe contracts for the media, event and health endpoints.
"""

from pydantic import BaseModel, Field


# ============================================================================
# Health Check
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    uptime: float = Field(description="Seconds since the service started")
    version: str
