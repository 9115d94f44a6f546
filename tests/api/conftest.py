"""API test fixtures: FastAPI client bound to an in-memory game session.

Invariants:
    - get_game_session overridden per test; no lifespan, no database
    - Every test starts in the menu with an empty save slot
"""

import pytest
from httpx import ASGITransport, AsyncClient

from well_of_power.api.routes.game import get_game_session
from well_of_power.config import Settings
from well_of_power.infrastructure.slot_stores import InMemorySlotStore
from well_of_power.main import app
from well_of_power.services.game_session import create_game_session


@pytest.fixture
def game(scenario_catalog):
    settings = Settings(
        storage_backend="memory",
        phase_band_starts={"intern": 0, "junior": 1},
    )
    return create_game_session(
        settings, catalog=scenario_catalog, store=InMemorySlotStore(),
    )


@pytest.fixture
async def client(game):
    app.dependency_overrides[get_game_session] = lambda: game
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
