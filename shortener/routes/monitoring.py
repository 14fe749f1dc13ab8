"""
Database health monitoring and connection pool tracking.

Every path here has a second segment so it can never shadow a short id.
"""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from shortener.core.config import settings
from shortener.db.sql.connection import get_engine, get_pool_status
import asyncio
import socket
import time
import logging

logger = logging.getLogger(__name__)
monitoring_router = APIRouter(prefix='/monitoring', tags=["Monitoring"])

@monitoring_router.get("/health")
async def health_check():
    """Liveness check for load balancers."""
    hostname = socket.gethostname()
    return {
        "status": "healthy",
        "timestamp": int(time.time()),
        "instance_id": settings.instance_id or hostname,
        "hostname": hostname,
        "version": "1.0.0",
    }

@monitoring_router.get("/health/detailed")
async def detailed_health_check(engine: AsyncEngine = Depends(get_engine)):
    """
    Database round trip plus connection pool status.
    """
    start_time = time.time()
    health_status = {
        "status": "healthy",
        "timestamp": int(time.time()),
        "checks": {}
    }

    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            value = result.scalar()
        if value != 1:
            raise SQLAlchemyError(f"Unexpected response from database: {value!r}")
        health_status["checks"]["database"] = {
            "status": "healthy",
            "response_time_ms": round((time.time() - start_time) * 1000, 2)
        }
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
        logger.error(f"Database health check failed: {e}")
        health_status["checks"]["database"] = {
            "status": "unhealthy",
            "error": str(e)
        }
        health_status["status"] = "unhealthy"

    health_status["pool"] = get_pool_status(engine)
    return health_status
