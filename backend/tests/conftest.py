"""
AquaGuard Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── test_settings: Settings pointing at a per-test SQLite file
    ├── fake_assessor: In-memory AssessmentService (no Gemini calls)
    ├── aquaguard_app: App with its lifespan entered (schema + seed applied)
    └── test_client: HTTPX AsyncClient routed straight into the app
"""

import os
import tempfile
from typing import List
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="aquaguard_test_"), "import.db"
)
os.environ["GEMINI_API_KEY"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

from app.config import Settings  # noqa: E402
from app.schemas.assessment import SensorReading  # noqa: E402
from app.services.llm_base import AssessmentService  # noqa: E402


class FakeAssessor(AssessmentService):
    """Returns canned text and records every reading it was asked about."""

    def __init__(self, text: str = "All readings look normal."):
        self.text = text
        self.configured = True
        self.readings: List[SensorReading] = []

    async def assess(self, reading: SensorReading) -> str:
        self.readings.append(reading)
        return self.text

    async def health_check(self) -> bool:
        return True


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = user
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def test_settings(tmp_path):
    """Fresh database file per test; demo locations off so tests own the rows."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'aquaguard.db'}",
        gemini_api_key="",
        log_level="WARNING",
        seed_demo_locations=False,
    )


@pytest.fixture
def fake_assessor():
    return FakeAssessor()


@pytest_asyncio.fixture
async def aquaguard_app(test_settings, fake_assessor):
    """
    App built from test_settings with the lifespan running.

    ASGITransport does not send lifespan events, so the lifespan context is
    entered here directly.
    """
    from app.main import create_app
    from app.services.gemini_service import get_assessment_service

    application = create_app(test_settings)
    application.dependency_overrides[get_assessment_service] = lambda: fake_assessor
    async with application.router.lifespan_context(application):
        yield application


@pytest_asyncio.fixture
async def test_client(aquaguard_app):
    """
    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=aquaguard_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
