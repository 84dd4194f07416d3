"""
Hunting search over Wazuh alerts.

Public interface:
  - FilterSet.from_params(): raw query parameters -> filter set
  - build_query() / build_search_body(): filter set -> OpenSearch request body
  - build_time_range(): start/end -> @timestamp range clause (or None)
  - resolve_page() / resolve_total(): paging window and total-hits reconciliation
  - normalize_hit(): alert hit -> fixed-shape row (RowProfile.HUNTING / FIM)
  - search_hunting_events() / fetch_fim_events(): run the search against the indexer
"""

from .models import FilterSet
from .paging import PageWindow, resolve_page, resolve_total
from .query import build_query, build_search_body, escape_query_string
from .rows import RowProfile, normalize_hit, normalize_hits
from .service import fetch_fim_events, search_hunting_events
from .time_range import build_time_range, is_valid_time_value, normalize_time_value

__all__ = [
    "FilterSet",
    "PageWindow",
    "resolve_page",
    "resolve_total",
    "build_query",
    "build_search_body",
    "escape_query_string",
    "RowProfile",
    "normalize_hit",
    "normalize_hits",
    "search_hunting_events",
    "fetch_fim_events",
    "build_time_range",
    "is_valid_time_value",
    "normalize_time_value",
]
