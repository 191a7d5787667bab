"""Health Probe — liveness endpoint for serverless and container platforms.

Invariants:
    - GET /health always returns 200 if the process is up
    - No filesystem or template access
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status

from resume_docgen.config import Settings, get_settings
from resume_docgen.core.filenames import iso_utc

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(settings: Settings = Depends(get_settings)):
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "ok",
        "timestamp": iso_utc(datetime.now(timezone.utc)),
        "environment": settings.environment,
    }
