"""
AquaGuard Backend — Locations Route Handlers
==============================================

What:  List, add, and simulate locations.
How:   Thin handlers; SQL lives in LocationService.

Endpoints:
    GET   /api/locations                 all rows, insertion order
    POST  /api/locations                 add with default readings (201)
    PATCH /api/locations/{id}/simulate   overwrite readings, always {success: true}
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.location import (
    LocationCreate,
    LocationResponse,
    SimulationRequest,
    SimulationResponse,
)
from app.services.location_service import location_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Locations"])


@router.get(
    "/locations",
    response_model=List[LocationResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all monitored locations",
)
async def list_locations(
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> List[LocationResponse]:
    locations = await location_service.list_locations(db)
    response.headers["X-Total-Count"] = str(len(locations))
    return locations


@router.post(
    "/locations",
    status_code=201,
    response_model=LocationResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Add a location",
    description="New locations start Safe with humidity 45.0, no water, 20.0°C.",
)
async def create_location(
    body: LocationCreate,
    db: AsyncSession = Depends(get_db_session),
) -> LocationResponse:
    return await location_service.create_location(db, body.name)


@router.patch(
    "/locations/{location_id}/simulate",
    response_model=SimulationResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Overwrite a location's sensor readings",
    description=(
        "Stores the supplied status, humidity, water_presence and temperature "
        "in one update. Unknown ids are ignored and still answer success."
    ),
)
async def simulate_location(
    location_id: int,
    body: SimulationRequest,
    db: AsyncSession = Depends(get_db_session),
) -> SimulationResponse:
    await location_service.simulate(db, location_id, body)
    return SimulationResponse(success=True)
