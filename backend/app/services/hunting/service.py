from __future__ import annotations

import logging
from typing import Any

from app.services.opensearch.client import search_alerts

from .models import FilterSet
from .paging import resolve_page, resolve_total
from .query import build_search_body
from .rows import RowProfile, normalize_hits


_LOGGER = logging.getLogger(__name__)


def search_hunting_events(filters: FilterSet) -> dict[str, Any]:
    """
    Run one hunting search and return the page result.

    Transport errors from the indexer propagate unchanged; the caller turns
    them into a single failure response.
    """
    window = resolve_page(filters.page, filters.size)
    body = build_search_body(filters, offset=window.offset, size=window.size)
    _LOGGER.debug("hunting search body=%s", body)

    resp = search_alerts(body)

    hits = (resp or {}).get("hits", {})
    if not isinstance(hits, dict):
        hits = {}
    raw_hits = hits.get("hits")
    if not isinstance(raw_hits, list):
        raw_hits = []

    return {
        "page": window.page,
        "size": window.size,
        "total": resolve_total(hits),
        "data": normalize_hits(raw_hits, RowProfile.HUNTING),
    }


def build_fim_events_body(agent_id: str, size: int = 50) -> dict[str, Any]:
    return {
        "query": {
            "bool": {
                "must": [
                    {"match": {"rule.groups": "syscheck"}},
                    {"match": {"agent.id": agent_id}},
                ]
            }
        },
        "sort": [{"@timestamp": {"order": "desc"}}],
        "size": size,
    }


def fetch_fim_events(agent_id: str, size: int = 50) -> list[dict[str, Any]]:
    resp = search_alerts(build_fim_events_body(agent_id, size))
    raw_hits = ((resp or {}).get("hits") or {}).get("hits")
    if not isinstance(raw_hits, list):
        return []
    return normalize_hits(raw_hits, RowProfile.FIM)
