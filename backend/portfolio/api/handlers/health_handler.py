"""
Health Check Handler

Provides health check endpoints for monitoring and load balancers.
"""

import asyncio

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from portfolio.config.settings import settings
from portfolio.shared.adapters.redis_adapter import get_redis_adapter
from portfolio.shared.db import check_db
from portfolio.shared.schemas.common import HealthResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Basic health check endpoint.

    Returns:
        HealthResponse with service status
    """
    return HealthResponse(
        status="healthy",
        service="portfolio",
        version=settings.APP_VERSION,
    )


@router.get("/ready")
async def readiness_check():
    """
    Readiness check for load balancers.

    The database is required; Redis only degrades caching, so it is
    reported but does not fail the check.
    """
    database_ok = await check_db()
    redis_ok = await asyncio.to_thread(get_redis_adapter().ping)
    body = {
        "status": "ready" if database_ok else "not_ready",
        "checks": {"database": database_ok, "redis": redis_ok},
    }
    return JSONResponse(status_code=200 if database_ok else 503, content=body)


@router.get("/live")
async def liveness_check():
    """
    Liveness check.

    Returns:
        Simple alive status
    """
    return {"status": "alive"}
