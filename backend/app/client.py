"""
AquaGuard Backend — HTTP Client
=================================

What:  Async client for the AquaGuard API, performing the same calls the
       browser UI makes: login, list/add locations, toggle a simulated
       leak, and request an assessment after each transition.
How:   Wraps httpx.AsyncClient. Pass `transport=httpx.ASGITransport(app)`
       to drive an in-process app without a server.

Authentication state is the username returned by /api/login, held in
memory on the client instance; nothing is sent with later requests.

Example:
    async with AquaGuardClient("http://localhost:3000") as client:
        await client.login("admin", "password123")
        kitchen = (await client.list_locations())[0]
        kitchen = await client.toggle_leak(kitchen)
        print(await client.assess(kitchen))
"""

import logging
from typing import List, Optional

import httpx

from app.schemas.location import LocationResponse, LocationStatus, SimulationRequest

logger = logging.getLogger(__name__)

LEAK_HUMIDITY = 85.0
SAFE_HUMIDITY = 45.0


def next_simulation(location: LocationResponse) -> SimulationRequest:
    """
    Readings for the opposite state of `location`.

    Safe → Leaking with humidity 85.0 and water present; anything else →
    Safe with humidity 45.0 and no water. Temperature is carried over.
    """
    leaking = location.status == LocationStatus.SAFE
    return SimulationRequest(
        status=LocationStatus.LEAKING if leaking else LocationStatus.SAFE,
        humidity=LEAK_HUMIDITY if leaking else SAFE_HUMIDITY,
        water_presence=1 if leaking else 0,
        temperature=location.temperature,
    )


class AquaGuardClient:
    """Thin async wrapper over the AquaGuard HTTP API."""

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)
        self.current_user: Optional[str] = None

    async def __aenter__(self) -> "AquaGuardClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def login(self, username: str, password: str) -> Optional[str]:
        """Returns the username on success, None on 401. Other errors raise."""
        response = await self._http.post(
            "/api/login", json={"username": username, "password": password}
        )
        if response.status_code == 401:
            logger.info("Login rejected: %s", response.json().get("message"))
            self.current_user = None
            return None
        response.raise_for_status()
        self.current_user = response.json()["user"]["username"]
        return self.current_user

    def logout(self) -> None:
        self.current_user = None

    async def list_locations(self) -> List[LocationResponse]:
        response = await self._http.get("/api/locations")
        response.raise_for_status()
        return [LocationResponse.model_validate(item) for item in response.json()]

    async def add_location(self, name: str) -> LocationResponse:
        response = await self._http.post("/api/locations", json={"name": name})
        response.raise_for_status()
        return LocationResponse.model_validate(response.json())

    async def simulate(self, location_id: int, readings: SimulationRequest) -> bool:
        response = await self._http.patch(
            f"/api/locations/{location_id}/simulate",
            json=readings.model_dump(mode="json"),
        )
        response.raise_for_status()
        return response.json()["success"]

    async def toggle_leak(self, location: LocationResponse) -> LocationResponse:
        """Flip a location between Safe and Leaking; returns the new snapshot."""
        readings = next_simulation(location)
        await self.simulate(location.id, readings)
        return location.model_copy(update=readings.model_dump())

    async def assess(self, location: LocationResponse) -> str:
        """Assessment text for the given snapshot (fallback text on AI failure)."""
        response = await self._http.post(
            "/api/assessments",
            json={
                "locationName": location.name,
                "humidity": location.humidity,
                "waterPresence": bool(location.water_presence),
                "temperature": location.temperature,
            },
        )
        response.raise_for_status()
        return response.json()["assessment"]
