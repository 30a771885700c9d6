"""Health check endpoints."""

from fastapi import APIRouter

from docacl.schemas.health import HealthResponse

router = APIRouter()


@router.get("")
async def health_check() -> HealthResponse:
    """Check if the API is healthy.

    Returns:
    --------
        HealthResponse: The status of the API.
    """
    return HealthResponse()
