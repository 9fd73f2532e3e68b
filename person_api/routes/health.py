"""
Person API — Root and Health Check Routes
==========================================

What:  `GET /` liveness text and `GET /health` with a database probe.
Who:   Called by load balancers, container health checks, and humans
       checking that the server is up.

Status levels:
    - healthy:   the person store answers `SELECT 1`
    - unhealthy: the store is unreachable or not connected
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from person_api import __version__
from person_api.schemas.person import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Liveness message",
)
async def root() -> str:
    return "Successful response."


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns the health status of the service and its database.",
)
async def health_check(request: Request) -> HealthResponse:
    """Probe the database with a lightweight query and report uptime."""
    database = request.app.state.database
    db_status = "connected"
    overall = "healthy"

    if not await database.ping():
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
