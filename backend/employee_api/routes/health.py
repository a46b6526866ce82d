"""
Employee API: Health Check Route
==================================

What:  GET /api/health for uptime monitors and container health checks.
How:   Always answers 200 while the process is serving; the payload reports
       database connectivity (SELECT 1) so monitors can alert on it without
       the probe itself failing.
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from employee_api import __version__
from employee_api.schemas.employee import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    database = request.app.state.database
    connected = await database.ping()
    if not connected:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
