"""
Shared fixtures for integration tests. These need a reachable Wazuh indexer.
"""
from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient


@pytest.fixture(scope="session")
def opensearch_client():
    from app.services.opensearch import get_client

    return get_client()


@pytest.fixture(scope="function")
async def async_client():
    from app.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
