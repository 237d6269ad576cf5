"""
AquaGuard Backend — HTTP API Tests
====================================

What:  End-to-end tests of the routes against a real per-test SQLite file.
How:   httpx AsyncClient over ASGITransport; the lifespan (schema + seed) is
       entered by the aquaguard_app fixture; Gemini is replaced by FakeAssessor.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import func, select

from app.main import create_app
from app.models.location import Location
from app.models.user import User
from app.services.auth_service import verify_password


LEAK = {"status": "Leaking", "humidity": 85.0, "water_presence": 1, "temperature": 21.0}
SAFE = {"status": "Safe", "humidity": 45.0, "water_presence": 0, "temperature": 21.0}


class TestLogin:

    @pytest.mark.asyncio
    async def test_seeded_credentials_succeed(self, test_client):
        response = await test_client.post(
            "/api/login", json={"username": "admin", "password": "password123"}
        )
        assert response.status_code == 200
        assert response.json() == {"success": True, "user": {"username": "admin"}}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username,password", [
        ("admin", "wrong"),
        ("nobody", "password123"),
        ("", ""),
        ("ADMIN", "password123"),
    ])
    async def test_other_pairs_are_rejected(self, test_client, username, password):
        response = await test_client.post(
            "/api/login", json={"username": username, "password": password}
        )
        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Invalid credentials"
        assert "user" not in body

    @pytest.mark.asyncio
    async def test_missing_fields_is_422(self, test_client):
        response = await test_client.post("/api/login", json={"username": "admin"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_password_is_stored_hashed(self, aquaguard_app):
        async with aquaguard_app.state.database.session() as session:
            user = (await session.execute(select(User))).scalar_one()
        assert user.password_hash != "password123"
        assert verify_password("password123", user.password_hash)


class TestLocations:

    @pytest.mark.asyncio
    async def test_add_location_uses_defaults(self, test_client):
        response = await test_client.post("/api/locations", json={"name": "Garage"})
        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Garage"
        assert body["status"] == "Safe"
        assert body["humidity"] == 45.0
        assert body["water_presence"] == 0
        assert body["temperature"] == 20.0
        assert isinstance(body["id"], int)

    @pytest.mark.asyncio
    async def test_add_location_gets_fresh_id(self, test_client):
        first = (await test_client.post("/api/locations", json={"name": "Attic"})).json()
        second = (await test_client.post("/api/locations", json={"name": "Garage"})).json()
        assert first["id"] != second["id"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"name": None}])
    async def test_add_location_requires_name(self, test_client, body):
        response = await test_client.post("/api/locations", json=body)
        assert response.status_code == 422
        assert (await test_client.get("/api/locations")).json() == []

    @pytest.mark.asyncio
    async def test_list_after_two_inserts(self, test_client):
        await test_client.post("/api/locations", json={"name": "Attic"})
        await test_client.post("/api/locations", json={"name": "Garage"})

        response = await test_client.get("/api/locations")

        assert response.status_code == 200
        assert [loc["name"] for loc in response.json()] == ["Attic", "Garage"]
        assert response.headers["X-Total-Count"] == "2"

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        response = await test_client.get("/api/locations")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_simulate_leak_then_restore(self, test_client):
        created = (await test_client.post("/api/locations", json={"name": "Garage"})).json()
        path = f"/api/locations/{created['id']}/simulate"

        response = await test_client.patch(path, json=LEAK)
        assert response.status_code == 200
        assert response.json() == {"success": True}
        leaking = (await test_client.get("/api/locations")).json()[0]
        assert leaking["status"] == "Leaking"
        assert leaking["water_presence"] == 1
        assert leaking["humidity"] == 85.0
        assert leaking["temperature"] == 21.0

        await test_client.patch(path, json=SAFE)
        restored = (await test_client.get("/api/locations")).json()[0]
        assert restored["status"] == "Safe"
        assert restored["water_presence"] == 0
        assert restored["humidity"] == 45.0

    @pytest.mark.asyncio
    async def test_simulate_unknown_id_is_noop(self, test_client):
        await test_client.post("/api/locations", json={"name": "Garage"})
        before = (await test_client.get("/api/locations")).json()

        response = await test_client.patch("/api/locations/9999/simulate", json=LEAK)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert (await test_client.get("/api/locations")).json() == before

    @pytest.mark.asyncio
    async def test_simulate_rejects_unknown_status(self, test_client):
        created = (await test_client.post("/api/locations", json={"name": "Garage"})).json()
        response = await test_client.patch(
            f"/api/locations/{created['id']}/simulate",
            json={**LEAK, "status": "Flooded"},
        )
        assert response.status_code == 422


class TestAssessments:

    @pytest.mark.asyncio
    async def test_assess_readings(self, test_client, fake_assessor):
        response = await test_client.post(
            "/api/assessments",
            json={"locationName": "Garage", "humidity": 85.0, "waterPresence": True, "temperature": 20.0},
        )
        assert response.status_code == 200
        assert response.json() == {"assessment": fake_assessor.text}
        assert fake_assessor.readings[0].location_name == "Garage"
        assert fake_assessor.readings[0].water_presence is True

    @pytest.mark.asyncio
    async def test_fallback_text_is_still_200(self, test_client, fake_assessor):
        fake_assessor.text = "Error connecting to AI intelligence service."
        response = await test_client.post(
            "/api/assessments",
            json={"locationName": "Garage", "humidity": 45.0, "waterPresence": False, "temperature": 20.0},
        )
        assert response.status_code == 200
        assert response.json()["assessment"] == "Error connecting to AI intelligence service."

    @pytest.mark.asyncio
    async def test_assess_stored_location(self, test_client, fake_assessor):
        created = (await test_client.post("/api/locations", json={"name": "Garage"})).json()
        await test_client.patch(f"/api/locations/{created['id']}/simulate", json=LEAK)

        response = await test_client.post(f"/api/locations/{created['id']}/assessment")

        assert response.status_code == 200
        assert response.json()["location_id"] == created["id"]
        reading = fake_assessor.readings[-1]
        assert reading.humidity == 85.0
        assert reading.water_presence is True

    @pytest.mark.asyncio
    async def test_assess_unknown_location_is_404(self, test_client):
        response = await test_client.post("/api/locations/9999/assessment")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestHealthAndMiddleware:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/api/locations", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get("/api/locations")
        assert len(response.headers["X-Request-ID"]) == 8


class TestStartup:

    @pytest.mark.asyncio
    async def test_restart_does_not_duplicate_seed(self, test_settings):
        settings = test_settings.model_copy(update={"seed_demo_locations": True})

        for _ in range(2):
            application = create_app(settings)
            async with application.router.lifespan_context(application):
                async with application.state.database.session() as session:
                    users = (await session.execute(select(func.count()).select_from(User))).scalar()
                    locations = (await session.execute(select(Location).order_by(Location.id))).scalars().all()

        assert users == 1
        assert [loc.name for loc in locations] == ["Main Kitchen", "Basement Utility"]
        assert locations[1].humidity == 68.2

    @pytest.mark.asyncio
    async def test_assessment_service_built_from_app_settings(self, test_settings):
        settings = test_settings.model_copy(
            update={"gemini_api_key": "test-key-not-real", "gemini_model": "gemini-custom"}
        )
        with patch('app.services.gemini_service.genai') as mock_genai:
            mock_response = MagicMock()
            mock_response.text = "Check the water heater."
            mock_model = MagicMock()
            mock_model.generate_content_async = AsyncMock(return_value=mock_response)
            mock_genai.GenerativeModel.return_value = mock_model

            application = create_app(settings)
            async with application.router.lifespan_context(application):
                transport = ASGITransport(app=application)
                async with AsyncClient(transport=transport, base_url="http://test") as client:
                    response = await client.post(
                        "/api/assessments",
                        json={"locationName": "Garage", "humidity": 70.0,
                              "waterPresence": False, "temperature": 20.0},
                    )

        assert response.json() == {"assessment": "Check the water heater."}
        mock_genai.configure.assert_called_once_with(api_key="test-key-not-real")
        assert mock_genai.GenerativeModel.call_args.args[0] == "gemini-custom"


class TestFrontend:

    @pytest.fixture
    def production_settings(self, test_settings, tmp_path):
        dist = tmp_path / "dist"
        dist.mkdir()
        (dist / "index.html").write_text("<html>AquaGuard</html>")
        (dist / "app.js").write_text("console.log('aquaguard');")
        return test_settings.model_copy(update={"app_env": "production", "static_dir": str(dist)})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/", "/dashboard", "/locations/3"])
    async def test_unknown_paths_get_index(self, production_settings, path):
        application = create_app(production_settings)
        transport = ASGITransport(app=application)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get(path)

        assert response.status_code == 200
        assert response.text == "<html>AquaGuard</html>"

    @pytest.mark.asyncio
    async def test_existing_asset_is_served(self, production_settings):
        application = create_app(production_settings)
        transport = ASGITransport(app=application)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/app.js")

        assert response.status_code == 200
        assert "aquaguard" in response.text

    @pytest.mark.asyncio
    async def test_api_routes_take_precedence(self, production_settings):
        application = create_app(production_settings)
        async with application.router.lifespan_context(application):
            transport = ASGITransport(app=application)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/api/locations")

        assert response.status_code == 200
        assert response.json() == []
