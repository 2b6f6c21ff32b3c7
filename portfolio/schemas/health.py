"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness plus dependency status)."""

    status: str = Field(default="ok", description="Service status")
    version: str = Field(..., description="Application version")
    database: str = Field(default="ok", description="ok or unavailable")
    cache: str = Field(default="ok", description="ok, disabled, or unavailable")
