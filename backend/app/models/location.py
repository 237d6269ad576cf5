"""
AquaGuard Backend — Location SQLAlchemy Model
===============================================

What:  ORM model representing the `locations` table.
Why:   Each monitored site has exactly one current sensor snapshot.
Who:   Used by LocationService for CRUD and by the seeder.

Table Design Rationale:
    - Integer autoincrement primary key: ids are handed to the UI and used in
      the simulate path; insertion order doubles as list order
    - status: 'Safe' or 'Leaking'; not tied to the sensor fields by the store
    - water_presence: 0/1 integer, matching the JSON contract
    - No history table: simulate overwrites the row in place
"""

from sqlalchemy import Float, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# Values given to every newly added location
DEFAULT_STATUS = "Safe"
DEFAULT_HUMIDITY = 45.0
DEFAULT_WATER_PRESENCE = 0
DEFAULT_TEMPERATURE = 20.0


class Location(Base):
    """
    A monitored physical site and its current sensor readings.

    Lifecycle:
        1. Created by POST /api/locations with the default readings
        2. Overwritten by PATCH /api/locations/{id}/simulate
        3. Never deleted
    """

    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=DEFAULT_STATUS,
        server_default=text("'Safe'"),
    )

    humidity: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=DEFAULT_HUMIDITY,
        server_default=text("45.0"),
    )

    water_presence: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=DEFAULT_WATER_PRESENCE,
        server_default=text("0"),
    )

    temperature: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=DEFAULT_TEMPERATURE,
        server_default=text("20.0"),
    )

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, name='{self.name}', status='{self.status}')>"
