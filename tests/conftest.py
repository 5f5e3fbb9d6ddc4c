import pytest
from typing import AsyncGenerator

from httpx import AsyncClient, ASGITransport

from app.main import app
from app.api.deps import get_registry
from app.services.lineup import Lineup, PlayerRef
from app.services.lineup_operations import LineupOperations
from app.services.match_context import MatchContextRegistry
from app.utils.formations import get_formation


@pytest.fixture(scope="function")
def registry() -> MatchContextRegistry:
    """Fresh in-memory registry per test."""
    return MatchContextRegistry(max_open_matches=10, strict=True, sort_bench=True)


@pytest.fixture(scope="function")
async def client(registry) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with overridden registry dependency."""

    app.dependency_overrides[get_registry] = lambda: registry

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# --- Data Fixtures ---

@pytest.fixture
def lineup_442() -> Lineup:
    """Empty 11-a-side lineup in 4-4-2."""
    return Lineup.empty(get_formation("4-4-2"))


@pytest.fixture
def ops(lineup_442) -> LineupOperations:
    return LineupOperations(lineup_442)


@pytest.fixture
def strict_ops(lineup_442) -> LineupOperations:
    return LineupOperations(lineup_442, strict=True)


@pytest.fixture
def players() -> dict[str, PlayerRef]:
    """A small squad keyed by short handle."""
    return {
        "gk": PlayerRef("p-gk", "Iker", 1, "PORTERO"),
        "gk2": PlayerRef("p-gk2", "Diego", 13, "PORTERO"),
        "d1": PlayerRef("p-d1", "Sergio", 4, "DEFENSA"),
        "d2": PlayerRef("p-d2", "Carles", 5, "DEFENSA"),
        "d3": PlayerRef("p-d3", "Gerard", 3, "DEFENSA"),
        "d4": PlayerRef("p-d4", "Jordi", 18, "DEFENSA"),
        "d5": PlayerRef("p-d5", "Dani", 2, "DEFENSA"),
        "m1": PlayerRef("p-m1", "Xavi", 6, "MEDIOCENTRO"),
        "m2": PlayerRef("p-m2", "Andres", 8, "MEDIOCENTRO"),
        "f1": PlayerRef("p-f1", "David", 7, "DELANTERO"),
        "f2": PlayerRef("p-f2", "Fernando", 9, "DELANTERO"),
        "f3": PlayerRef("p-f3", "Pedro", 11, "DELANTERO"),
        "x": PlayerRef("p-x", "Utility", 20, "COMODIN"),
    }


@pytest.fixture
def roster_records() -> list[dict]:
    """Roster rows as served by the club API."""
    return [
        {"id": "u1", "name": "Iker", "jerseyNumber": 1, "position": "Portero"},
        {"id": "u2", "name": "Sergio", "jerseyNumber": 4, "position": "Defensa"},
        {"id": "u3", "name": "Carles", "jerseyNumber": 5, "position": "Defensa"},
        {"id": "u4", "name": "Xavi", "jerseyNumber": 6, "position": "Mediocentro"},
        {"id": "u5", "name": "David", "jerseyNumber": 7, "position": "Delantero"},
        {"id": "u6", "name": "Jordi", "jerseyNumber": 18, "position": "Defensa"},
    ]
