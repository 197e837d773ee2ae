"""Health check endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from persistence.database import get_db

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict:
    """Basic health check."""
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check(db: Annotated[AsyncSession, Depends(get_db)]) -> dict:
    """Readiness check including dependencies.

    Only the database is probed. The hub and the LLM are optional tiers, so
    they report configuration state and never make the service unready.
    """
    try:
        await db.execute(text("SELECT 1"))
        database = "healthy"
    except SQLAlchemyError as e:
        logger.warning("Database readiness probe failed: %s", e)
        database = "unhealthy"

    return {
        "status": "ready" if database == "healthy" else "degraded",
        "services": {
            "database": database,
            "hub": "enabled" if settings.HF_ENABLED else "disabled",
            "llm": "configured" if settings.llm_configured else "not_configured",
        },
    }
