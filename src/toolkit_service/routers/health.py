"""
Health check endpoints for the Toolkit Service.

These endpoints provide system health information and operational status
for monitoring and diagnostics.
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from toolkit_service.config import settings
from toolkit_service.db import get_db
from toolkit_service.logging_config import logger

router = APIRouter(
    prefix="/health",
    tags=["health"],
)

start_time = time.time()


class HealthResponse(BaseModel):
    """Schema for health check response."""

    status: str
    version: str
    uptime_seconds: float
    timestamp: datetime


class DatabaseHealthResponse(BaseModel):
    """Schema for database health check response."""

    status: str
    latency_ms: float
    connected: bool
    message: str


@router.get(
    "/",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns the health status of the Toolkit Service",
)
async def health_check():
    """
    Simple health check endpoint that returns service status and uptime.
    """
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "uptime_seconds": time.time() - start_time,
        "timestamp": datetime.now(timezone.utc),
    }


@router.get(
    "/db",
    response_model=DatabaseHealthResponse,
    summary="Database health check",
    description="Checks database connectivity; responds 503 when the store is down",
)
async def db_health_check(db: AsyncSession = Depends(get_db)):
    """
    Database health check that tests connectivity and measures latency.
    """
    start = time.time()
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database health check failed: {e.__class__.__name__}: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "error",
                "latency_ms": (time.time() - start) * 1000,
                "connected": False,
                "message": f"Database connection failed: {e.__class__.__name__}",
            },
        )

    return {
        "status": "connected",
        "latency_ms": (time.time() - start) * 1000,
        "connected": True,
        "message": "Database connection successful",
    }
