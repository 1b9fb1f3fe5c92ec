"""
Health check routes
"""

from fastapi import APIRouter, HTTPException, status
import structlog

from inventory_admin.utils.dependencies import ProfileStoreDep
from inventory_admin.utils.exceptions import StoreError

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    """Service health check"""
    return {"status": "OK", "message": "ERP Server is running"}


@router.get("/health/database")
async def database_health_check(profile_store: ProfileStoreDep):
    """Database connection health check"""
    try:
        await profile_store.ping()
    except StoreError as e:
        logger.error("Database health check failed", error=e.message)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection failed"
        )

    return {
        "status": "healthy",
        "database": "connected",
        "test_query": "passed"
    }
