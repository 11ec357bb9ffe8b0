"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the student transport fee service
"""
from fastapi import APIRouter

from app.api.v1 import payments, semester_payments
from app.config.settings import settings
from app.core.logging import get_logger
from app.schemas.transport import HealthResponse

logger = get_logger(__name__)

# Create main API v1 router with proper configuration
router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"}
    }
)

router.include_router(semester_payments.router)
router.include_router(payments.router)


# Health endpoint
@router.get("/health", response_model=HealthResponse, tags=["System Health"])
async def api_health_check():
    """
    Liveness probe
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.API_VERSION,
    }


logger.info(
    "API v1 router initialized",
    extra={"total_routes": len(router.routes)}
)
