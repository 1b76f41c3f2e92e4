"""Health check endpoints for service monitoring.

``/health`` answers as long as the process is up; ``/health/ready``
also checks the database and the uploads directory.
"""

import os
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from realty_api.api.deps import DBSession, Media
from realty_api.core.config import settings

router = APIRouter(tags=["Health"])

VERSION = "1.0.0"


@router.get(
    "/health",
    response_model=Dict[str, Any],
    summary="Health Check",
    description="Check if the API service is running.",
)
async def health_check() -> Dict[str, Any]:
    """Perform a basic health check.

    Returns:
        Dictionary with service status and metadata.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.APP_ENV,
        "version": VERSION,
    }


@router.get(
    "/health/ready",
    response_model=Dict[str, Any],
    summary="Readiness Check",
    description="Check database connectivity and that uploads can be written.",
)
async def readiness_check(db: DBSession, storage: Media) -> Dict[str, Any]:
    """Check the database connection and the uploads directory.

    Args:
        db: Async database session.
        storage: Media storage whose root must be writable.

    Returns:
        Dictionary with the status of each dependency.
    """
    checks: Dict[str, Dict[str, str]] = {}

    try:
        result = await db.execute(text("SELECT 1"))
        result.scalar()
        checks["database"] = {"status": "healthy", "message": "Connected"}
    except SQLAlchemyError as e:
        checks["database"] = {"status": "unhealthy", "message": str(e)}

    if os.access(storage.root, os.W_OK):
        checks["uploads"] = {"status": "healthy", "message": str(storage.root)}
    else:
        checks["uploads"] = {"status": "unhealthy", "message": "Uploads directory is not writable"}

    ready = all(check["status"] == "healthy" for check in checks.values())
    return {
        "status": "ready" if ready else "not_ready",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": checks,
    }
