# Ensure backend is at sys.path[0] when pytest runs (from repo root or from backend dir)
import sys
from pathlib import Path

_tests_dir = Path(__file__).resolve().parent
_backend = _tests_dir.parent
_str_backend = str(_backend)
if sys.path[0:1] != [_str_backend]:
    sys.path.insert(0, _str_backend)

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from core.database import dispose_database, init_database  # noqa: E402


def _club_data(name: str = "Testverein-X", **overrides):
    data = {
        "name": name,
        "type": "AMATEUR",
        "league": "Kreisliga",
        "country": "Germany",
        "memberCount": 250,
        "foundingDate": "2025-01-01T00:00:00Z",
        "stadium": {"city": "Karlsruhe", "capacity": 1200},
        "players": [{"firstName": "Max", "lastName": "Muster", "age": 21, "preferredFoot": "LEFT"}],
    }
    data.update(overrides)
    return data


@pytest.fixture
def club_data():
    """Factory for a valid create payload (camelCase, as sent by REST clients)."""
    return _club_data


@pytest_asyncio.fixture
async def db():
    """In-memory SQLite with the club tables."""
    manager = await init_database("sqlite+aiosqlite:///:memory:")
    await manager.create_schema()
    yield manager
    await dispose_database()


@pytest_asyncio.fixture
async def client(db):
    """HTTP client against the FastAPI app, sharing the ``db`` database."""
    from main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
