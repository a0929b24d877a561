from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from healthref.api.dependencies import get_db
from healthref.api.main import app
from healthref.services.metrics import metrics


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture(autouse=True)
def _reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def mock_session():
    """AsyncMock session injected in place of the real database dependency."""
    session = AsyncMock()
    app.dependency_overrides[get_db] = lambda: session
    yield session
    app.dependency_overrides.clear()


def scalars_result(values):
    """Mock ``Result`` whose ``.scalars().all()`` returns *values*."""
    result = MagicMock()
    result.scalars.return_value.all.return_value = values
    return result


def rows_result(rows):
    """Mock ``Result`` whose ``.all()`` returns *rows*."""
    result = MagicMock()
    result.all.return_value = rows
    return result


def make_facility(
    name="PHC Alpha",
    facility_type="PHC",
    lat="12.97",
    lon="77.59",
    state="Karnataka",
    district="Bengaluru Urban",
    subdistrict="Anekal",
):
    return SimpleNamespace(
        facility_name=name,
        facility_type=facility_type,
        latitude=lat,
        longitude=lon,
        state_name=state,
        district_name=district,
        subdistrict_name=subdistrict,
    )
