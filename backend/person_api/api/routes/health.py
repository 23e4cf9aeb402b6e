"""Health Routes — is the person API process up, and can it reach the person store.

Invariants:
    - GET /api/v1/health/ answers 200 without touching the database
    - GET /api/v1/health/ready answers 503 until init_db has run and SELECT 1 succeeds

Design Decisions:
    - db_manager looked up on the database module per request: it only exists
      after the lifespan has started
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import person_api.infrastructure.database as database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Liveness: the process is serving requests."""
    return {
        "status": "healthy",
        "service": "person-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness: the person store answers a trivial query."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        logger.warning("Readiness failed: person store unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
