"""Shared fixtures: in-process API client with an empty nap log."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from main import app
from sleepsync.models.nap import NapWindow
from sleepsync.services.nap_log_service import NapLog


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest_asyncio.fixture
async def client():
    """HTTP test client with a fresh nap log (lifespan does not run under ASGITransport)."""
    app.state.nap_log = NapLog()
    app.state.knowledge_base_url = "https://example.org/sleep-notes"

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.state.nap_log = None


@pytest.fixture
def short_morning_nap() -> list[NapWindow]:
    return [NapWindow(start="09:00", end="09:20")]
