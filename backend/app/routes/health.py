"""
AquaGuard Backend — Health Check Route
========================================

What:  Health check endpoint for monitoring probes.
How:   Pings the database handle and asks the assessment service whether
       Gemini is reachable.

Status levels:
    - healthy:   database and Gemini both reachable
    - degraded:  Gemini unconfigured or unreachable (assessments fall back)
    - unhealthy: database unreachable
"""

import logging
import time

from fastapi import APIRouter, Depends

from app import __version__
from app.database import Database, get_database
from app.schemas.common import HealthResponse
from app.services.gemini_service import get_assessment_service
from app.services.llm_base import AssessmentService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    database: Database = Depends(get_database),
    assessor: AssessmentService = Depends(get_assessment_service),
) -> HealthResponse:
    overall = "healthy"

    db_status = "connected"
    if not await database.ping():
        db_status = "disconnected"
        overall = "unhealthy"

    gemini_status = "available"
    if not getattr(assessor, "configured", True):
        gemini_status = "unconfigured"
    elif not await assessor.health_check():
        gemini_status = "unavailable"
    if gemini_status != "available" and overall != "unhealthy":
        overall = "degraded"

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        gemini=gemini_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
