"""
Database health check.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from url_registry.db.connection import get_db_async, check_connection
import logging

logger = logging.getLogger(__name__)
health_router = APIRouter(tags=["Health"])

@health_router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db_async)):
    """
    Connectivity probe for load balancers and uptime checks.
    Always answers 200; a broken database is reported in the body.
    """
    try:
        await check_connection(db)
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": "connected",
        }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "error",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": "disconnected",
            "error": "Database connection failed",
        }
