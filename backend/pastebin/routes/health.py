"""
Pastebin Backend - Health Check Route
======================================

What:  Health check endpoint for monitoring and container probes.
How:   Pings the paste store (SELECT 1) and reports status and uptime.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    - healthy:   Database reachable
    - unhealthy: Database unreachable (the service cannot store or read pastes)
"""

import logging
import time

from fastapi import APIRouter, Depends

from pastebin import __version__
from pastebin.dependencies import get_paste_store
from pastebin.schemas.paste import HealthResponse
from pastebin.store import PasteStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns the health status of the service and its database.",
)
async def health_check(store: PasteStore = Depends(get_paste_store)) -> HealthResponse:
    db_connected = await store.ping()
    if not db_connected:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if db_connected else "unhealthy",
        version=__version__,
        database="connected" if db_connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
