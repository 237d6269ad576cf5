"""
AquaGuard Backend — Assessment Schemas
========================================

What:  Input/output models for AI leak risk assessments.

The request accepts both the camelCase names the browser UI sends
(`locationName`, `waterPresence`) and their snake_case equivalents.
"""

from pydantic import BaseModel, ConfigDict, Field


class SensorReading(BaseModel):
    """
    What:  One set of sensor values to be assessed.
    Who:   Body of POST /api/assessments; also built from a stored Location.
    """
    model_config = ConfigDict(populate_by_name=True)

    location_name: str = Field(alias="locationName")
    humidity: float
    water_presence: bool = Field(alias="waterPresence")
    temperature: float


class AssessmentResponse(BaseModel):
    """Generated text, or the fallback string when generation failed."""
    assessment: str


class LocationAssessmentResponse(AssessmentResponse):
    location_id: int
