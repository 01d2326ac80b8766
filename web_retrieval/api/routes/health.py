"""Health check endpoint."""

from fastapi import APIRouter

from web_retrieval import __version__
from web_retrieval.api.models.health import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check API health status."""
    return HealthResponse(status="healthy", version=__version__)
