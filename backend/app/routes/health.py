"""
WorshipDeck Backend - Health Check Routes
==========================================

What:  Liveness (/ping) and readiness (/health) probes.
Why:   The presenter UI polls /ping to show a connection indicator; Docker
       and process supervisors use /health to decide whether the service can
       serve traffic.

Status levels (/health):
    - healthy:   SQLite file reachable (HTTP 200)
    - unhealthy: database probe failed (HTTP 503)
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response

from app import __version__
from app.schemas.common import HealthResponse, PingResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get("/ping", response_model=PingResponse, summary="Liveness probe")
async def ping() -> PingResponse:
    return PingResponse(status="ok", timestamp=datetime.now(timezone.utc))


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Runs `SELECT 1` against the store and reports the result.",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await request.app.state.database.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
