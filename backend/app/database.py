"""
AquaGuard Backend — Database Handle & Session Management
==========================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   A `Database` handle owns the engine and session factory. It is opened
       in the application lifespan, stored on `app.state.database`, and
       disposed on shutdown. Request handlers receive sessions through the
       `get_db_session` dependency, which commits on success and rolls back
       on error.

Why an explicit handle (not a module-level engine):
    - Tests build isolated apps against their own SQLite files
    - Shutdown closes exactly the connections startup opened
    - Nothing touches the database at import time
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so that `Base.metadata` knows every
    table; `Database.create_all()` uses it to create missing tables.
    """
    pass


class Database:
    """
    Handle for the local relational store.

    Lifecycle:
        db = Database(url)          # engine created, no connection yet
        await db.create_all()       # CREATE TABLE IF NOT EXISTS for all models
        async with db.session() as session: ...
        await db.dispose()          # close pooled connections
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        # pool_pre_ping: catches connections invalidated behind our back
        self.engine: AsyncEngine = create_async_engine(
            url,
            pool_pre_ping=True,
            echo=echo,
        )
        # expire_on_commit=False: ORM objects stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    def session(self) -> AsyncSession:
        """Create a new session. Use as an async context manager."""
        return self.session_factory()

    async def create_all(self) -> None:
        """
        Create every table registered on `Base.metadata` if it is absent.

        Models must be imported before this runs so they are registered.
        """
        # Imported for their side effect of registering tables on Base
        from app.models import location, user  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured at %s", self.url)

    async def ping(self) -> bool:
        """Run SELECT 1. Returns False instead of raising."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """
        What:  Gracefully closes all connections in the pool.
        When:  Called during application shutdown (lifespan handler).
        """
        await self.engine.dispose()


# ── Dependencies ──────────────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """FastAPI dependency returning the handle opened by the lifespan."""
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the handle on app.state
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session

    Example usage in a route:
        @router.get("/locations")
        async def list_locations(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
