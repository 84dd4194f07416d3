"""
Shared fixtures for unit tests. Everything external is mocked.
"""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient


@pytest.fixture
def mock_opensearch_client():
    client = MagicMock()
    client.search = MagicMock(return_value={"hits": {"hits": [], "total": {"value": 0, "relation": "eq"}}})
    return client


@pytest.fixture
def sample_alert_hit():
    """A fully populated wazuh-alerts hit."""
    return {
        "_id": "alert-001",
        "_index": "wazuh-alerts-4.x-2024.01.01",
        "_source": {
            "@timestamp": "2024-01-01T00:00:00.000Z",
            "agent": {"id": "001", "name": "web-01"},
            "manager": {"name": "wazuh-manager"},
            "rule": {
                "id": "5710",
                "level": 5,
                "description": "sshd: Attempt to login using a non-existent user",
                "groups": ["syslog", "sshd", "authentication_failed"],
            },
            "decoder": {"name": "sshd"},
            "location": "/var/log/auth.log",
            "full_log": "Jan  1 00:00:00 web-01 sshd[123]: Invalid user admin from 10.0.0.5",
        },
    }


@pytest.fixture
def sample_fim_hit():
    """A syscheck (FIM) alert hit with audit information."""
    return {
        "_id": "fim-001",
        "_source": {
            "@timestamp": "2024-01-02T10:00:00.000Z",
            "agent": {"id": "002", "name": "db-01"},
            "rule": {
                "id": "550",
                "level": 7,
                "description": "Integrity checksum changed.",
                "groups": ["ossec", "syscheck", "syscheck_entry_modified"],
            },
            "syscheck": {
                "path": "/etc/passwd",
                "event": "modified",
                "uname_after": "root",
                "audit": {"login_user": {"name": "alice"}},
                "diff": "< old\n---\n> new",
            },
        },
    }


@pytest.fixture
async def async_client():
    """FastAPI test client bound to the ASGI app (no lifespan, no network)."""
    from app.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
