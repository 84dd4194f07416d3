from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from app.core.config import settings


_LOGGER = logging.getLogger(__name__)


class WazuhAPIError(RuntimeError):
    pass


def _timeout() -> httpx.Timeout:
    value = settings.wazuh_api_timeout
    return httpx.Timeout(value, connect=min(5.0, value))


def _api_url(route: str) -> str:
    return f"{settings.wazuh_api_url.rstrip('/')}/{route.lstrip('/')}"


async def authenticate(http: httpx.AsyncClient) -> str:
    resp = await http.post(
        _api_url("/security/user/authenticate"),
        auth=(settings.wazuh_api_username, settings.wazuh_api_password),
    )
    resp.raise_for_status()
    token = ((resp.json() or {}).get("data") or {}).get("token")
    if not isinstance(token, str) or not token:
        raise WazuhAPIError("authenticate response carried no token")
    return token


async def fetch_syscheck_items(
    agent_id: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[dict[str, Any]]:
    """Return the FIM (syscheck) inventory of one agent as reported by the manager."""
    # The manager API uses a self-signed certificate out of the box.
    async with httpx.AsyncClient(timeout=_timeout(), verify=False, transport=transport) as http:
        token = await authenticate(http)
        resp = await http.get(
            _api_url(f"/syscheck/{quote(agent_id, safe='')}"),
            headers={"Authorization": f"Bearer {token}"},
        )
        resp.raise_for_status()

    payload = resp.json()
    items = ((payload or {}).get("data") or {}).get("affected_items")
    if not isinstance(items, list):
        _LOGGER.warning("syscheck response for agent %s has no affected_items", agent_id)
        return []
    return [item for item in items if isinstance(item, dict)]
