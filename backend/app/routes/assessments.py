"""
AquaGuard Backend — Assessment Route Handlers
===============================================

What:  Exposes the Gemini leak assessment over HTTP.
Why:   The API key stays on the server; the UI only sends readings.

Endpoints:
    POST /api/assessments                   assess readings sent in the body
    POST /api/locations/{id}/assessment     assess the stored snapshot (404 if missing)

Both answer 200 even when Gemini fails; the body then carries fallback text.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.assessment import (
    AssessmentResponse,
    LocationAssessmentResponse,
    SensorReading,
)
from app.schemas.common import ErrorResponse
from app.services.gemini_service import get_assessment_service
from app.services.llm_base import AssessmentService
from app.services.location_service import location_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Assessments"])


@router.post(
    "/assessments",
    response_model=AssessmentResponse,
    summary="Assess a set of sensor readings",
)
async def assess_readings(
    reading: SensorReading,
    assessor: AssessmentService = Depends(get_assessment_service),
) -> AssessmentResponse:
    text = await assessor.assess(reading)
    return AssessmentResponse(assessment=text)


@router.post(
    "/locations/{location_id}/assessment",
    response_model=LocationAssessmentResponse,
    responses={404: {"description": "Location not found", "model": ErrorResponse}},
    summary="Assess the current snapshot of a stored location",
)
async def assess_location(
    location_id: int,
    db: AsyncSession = Depends(get_db_session),
    assessor: AssessmentService = Depends(get_assessment_service),
) -> LocationAssessmentResponse:
    location = await location_service.get_location(db, location_id)
    reading = SensorReading(
        location_name=location.name,
        humidity=location.humidity,
        water_presence=bool(location.water_presence),
        temperature=location.temperature,
    )
    text = await assessor.assess(reading)
    return LocationAssessmentResponse(location_id=location.id, assessment=text)
