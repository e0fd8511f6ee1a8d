"""Health check endpoints."""

from fastapi import APIRouter

from schemas import HealthResponse

SERVICE_NAME = "certificate-renderer"

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", service=SERVICE_NAME)
