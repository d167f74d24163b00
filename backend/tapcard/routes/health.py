# backend/tapcard/routes/health.py
"""
Health check endpoint for monitoring and load balancer probes.
"""

from fastapi import APIRouter

from ..core.config import settings
from ..core.constants import API_VERSION, BRAND_NAME
from ..schemas.health import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe. Does not touch the database."""
    return HealthResponse(
        status="ok",
        service=f"{BRAND_NAME.lower()}-api",
        version=API_VERSION,
        environment=settings.environment,
    )
