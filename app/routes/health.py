"""
Health check endpoint for monitoring.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException, status
from app.schemas.spellcheck import HealthResponse
from app.services.provider_registry import get_available_spellcheck_providers
from app.utils.logger import get_logger

logger = get_logger("health")
router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check application status and configured spell-check providers",
    responses={
        200: {"description": "Service is healthy"},
        503: {"description": "No spell-check provider is configured"}
    }
)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Checks:
    - Application is running
    - At least one spell-check backend is configured

    The remote backends are not contacted.

    Returns:
        HealthResponse with status and timestamp (200 if healthy, 503 if not)
    """
    providers = get_available_spellcheck_providers()

    if providers:
        logger.debug("Health check: all systems operational")
        return HealthResponse(
            status="healthy",
            providers=providers,
            timestamp=datetime.now(timezone.utc)
        )

    logger.warning("Health check: no spell-check provider configured")
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail={
            "status": "degraded",
            "providers": [],
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    )
