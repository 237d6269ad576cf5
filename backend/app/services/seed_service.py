"""
AquaGuard Backend — Startup Seeding
=====================================

What:  Inserts the demo account and demo locations into empty tables.
When:  Once per process start, right after the schema is ensured.

Each table is checked independently and seeded only when it has no rows,
so restarting against an existing database file changes nothing.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.models.location import Location
from app.models.user import User
from app.services.auth_service import hash_password

logger = logging.getLogger(__name__)

DEMO_LOCATIONS = (
    # name, status, humidity, water_presence, temperature
    ("Main Kitchen", "Safe", 42.5, 0, 21.0),
    ("Basement Utility", "Safe", 68.2, 0, 18.5),
)


async def _count(db: AsyncSession, model) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar() or 0


async def seed_defaults(db: AsyncSession, app_settings: Settings) -> None:
    """Seed users and (optionally) locations. Caller commits."""
    if await _count(db, User) == 0:
        db.add(
            User(
                username=app_settings.seed_admin_username,
                password_hash=hash_password(app_settings.seed_admin_password),
            )
        )
        logger.info("Seeded user %r", app_settings.seed_admin_username)

    if app_settings.seed_demo_locations and await _count(db, Location) == 0:
        for name, status, humidity, water_presence, temperature in DEMO_LOCATIONS:
            db.add(
                Location(
                    name=name,
                    status=status,
                    humidity=humidity,
                    water_presence=water_presence,
                    temperature=temperature,
                )
            )
        logger.info("Seeded %d demo locations", len(DEMO_LOCATIONS))

    await db.flush()
