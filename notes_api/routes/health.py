"""
Notes API — Health Check Route
===============================

What:  Liveness endpoint for Kubernetes readiness/liveness probes.
How:   Answers from process state only: no database round-trip, so a slow
       database never makes the probe time out.
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter

from notes_api.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Process start, for uptime reporting
_start_time = time.monotonic()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    logger.debug("Health check OK")
    return HealthResponse(
        status="ok",
        uptime=round(time.monotonic() - _start_time, 3),
        now=datetime.now(timezone.utc),
    )
