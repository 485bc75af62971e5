"""
Wardrobe Backend — Health Check Route
======================================

What:  Liveness and database-connectivity probe for load balancers and Docker.
How:   Runs `SELECT 1` through the application's Database. The endpoint
       always answers 200; `status` says whether the database was reachable.
"""

import logging
import time

from fastapi import APIRouter, Request

from wardrobe import __version__
from wardrobe.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports the application version and whether the database answers queries.",
)
async def health_check(request: Request) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await request.app.state.database.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
