"""
AquaGuard Backend — Location Service
======================================

What:  CRUD over the locations table.
Why:   Keeps SQL out of the route handlers.
Who:   Called by the locations and assessment routers.

Operations:
    list_locations()    SELECT * ORDER BY id
    create_location()   INSERT with the default sensor readings
    simulate()          single UPDATE of all four sensor fields, no existence check
    get_location()      SELECT by id, NotFoundError when missing
"""

import logging
from typing import List

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError
from app.models.location import (
    DEFAULT_HUMIDITY,
    DEFAULT_STATUS,
    DEFAULT_TEMPERATURE,
    DEFAULT_WATER_PRESENCE,
    Location,
)
from app.schemas.location import LocationResponse, SimulationRequest

logger = logging.getLogger(__name__)


class LocationService:
    """
    Business logic layer for locations.

    Error Handling Strategy:
        SQLAlchemy errors are wrapped in DatabaseError (generic 500 to the
        client, details in the log). NotFoundError propagates as-is.
    """

    async def list_locations(self, db: AsyncSession) -> List[LocationResponse]:
        """Return every location in insertion order. No pagination."""
        try:
            result = await db.execute(select(Location).order_by(Location.id))
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing locations: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve locations. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [LocationResponse.model_validate(row) for row in rows]

    async def create_location(self, db: AsyncSession, name: str) -> LocationResponse:
        """
        Insert a location with the default readings (Safe, 45.0, 0, 20.0).

        flush() assigns the id without committing; get_db_session commits
        once the response is built.
        """
        location = Location(
            name=name,
            status=DEFAULT_STATUS,
            humidity=DEFAULT_HUMIDITY,
            water_presence=DEFAULT_WATER_PRESENCE,
            temperature=DEFAULT_TEMPERATURE,
        )
        try:
            db.add(location)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating location: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the location. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Location created: id=%s name=%r", location.id, name)
        return LocationResponse.model_validate(location)

    async def simulate(
        self,
        db: AsyncSession,
        location_id: int,
        readings: SimulationRequest,
    ) -> int:
        """
        Overwrite all four sensor fields of one location in a single UPDATE.

        An unknown id matches no row: nothing is written and no error is
        raised. Returns the number of rows updated (0 or 1).
        """
        stmt = (
            update(Location)
            .where(Location.id == location_id)
            .values(
                status=readings.status.value,
                humidity=readings.humidity,
                water_presence=readings.water_presence,
                temperature=readings.temperature,
            )
        )
        try:
            result = await db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(
                "Database error simulating location %s: %s", location_id, str(e), exc_info=True
            )
            raise DatabaseError(
                message="Could not update the location. Please try again.",
                context={"location_id": location_id},
            )

        if result.rowcount == 0:
            logger.warning("Simulate for unknown location id=%s ignored", location_id)
        else:
            logger.info(
                "Location %s simulated: status=%s humidity=%.1f water=%d",
                location_id,
                readings.status.value,
                readings.humidity,
                readings.water_presence,
            )
        return result.rowcount

    async def get_location(self, db: AsyncSession, location_id: int) -> LocationResponse:
        """
        Raises:
            NotFoundError: No location with that id (→ 404)
        """
        try:
            location = await db.get(Location, location_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching location %s: %s", location_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the location. Please try again.",
                context={"location_id": location_id},
            )
        if location is None:
            raise NotFoundError(resource="location", resource_id=str(location_id))
        return LocationResponse.model_validate(location)


location_service = LocationService()
