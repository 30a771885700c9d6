"""Health check schemas."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str = "healthy"
