"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the display time zone cannot be resolved

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from sagenest.config import get_settings
from sagenest.infrastructure.clock import today_in

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "sagenest-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — the clock must resolve in the configured zone."""
    zone = get_settings().display_timezone
    try:
        today = today_in(zone)
    except Exception as e:
        logger.error(f"Clock unavailable for zone {zone}: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "clock_unavailable"},
        )
    return {"status": "ready", "checks": {"clock": "healthy", "today": today.isoformat()}}
