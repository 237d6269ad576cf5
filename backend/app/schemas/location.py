"""
AquaGuard Backend — Location Request/Response Schemas
=======================================================

What:  Pydantic models defining the locations API contract.
Why:   Input coercion, response serialization, and OpenAPI docs.

Design Decision:
    Schemas are separate from the SQLAlchemy model so the JSON contract
    (snake_case fields, water_presence as 0/1) is stated in one place.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class LocationStatus(str, Enum):
    """The two states a location can be simulated into."""
    SAFE = "Safe"
    LEAKING = "Leaking"


class LocationResponse(BaseModel):
    """
    What:  Full sensor snapshot of one location.
    Who:   Returned by GET /api/locations (as items) and POST /api/locations.
    """
    id: int = Field(description="Location identifier")
    name: str = Field(description="Display name, e.g. 'Main Kitchen'")
    status: LocationStatus = Field(description="Safe or Leaking")
    humidity: float = Field(description="Relative humidity in percent")
    water_presence: int = Field(description="1 when water is detected, else 0")
    temperature: float = Field(description="Temperature in °C")

    model_config = {"from_attributes": True}


class LocationCreate(BaseModel):
    """Body of POST /api/locations. The name is not constrained."""
    name: str = Field(description="Display name for the new location")


class SimulationRequest(BaseModel):
    """
    Body of PATCH /api/locations/{id}/simulate.

    Every field is supplied by the caller; the server does not derive one
    from another (a Leaking status with water_presence=0 is stored as is).
    """
    status: LocationStatus
    humidity: float
    water_presence: int = Field(ge=0, le=1)
    temperature: float


class SimulationResponse(BaseModel):
    """Always `{"success": true}`, whether or not the id existed."""
    success: bool = True


LocationList = List[LocationResponse]
