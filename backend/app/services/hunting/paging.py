from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_PAGE = 1
DEFAULT_SIZE = 50
MAX_SIZE = 500


@dataclass(frozen=True)
class PageWindow:
    page: int
    size: int
    offset: int


def _parse_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    s = str(value).strip()
    # Leading-integer parse: "3abc" -> 3, "2.9" -> 2.
    digits = ""
    for i, ch in enumerate(s):
        if ch.isdigit() or (i == 0 and ch in "+-"):
            digits += ch
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return None


def resolve_page(page_raw: Any, size_raw: Any) -> PageWindow:
    page = _parse_int(page_raw)
    if page is None or page < 1:
        page = DEFAULT_PAGE

    size = _parse_int(size_raw)
    if not size:
        size = DEFAULT_SIZE
    size = min(max(size, 1), MAX_SIZE)

    return PageWindow(page=page, size=size, offset=(page - 1) * size)


def resolve_total(hits: Any) -> int:
    """
    Reconcile ``hits.total`` into a plain number.

    OpenSearch reports either a bare number or ``{"value": n, "relation": "eq"|"gte"}``.
    Without either, the number of hits actually returned is used.
    """
    if not isinstance(hits, dict):
        return 0

    raw_total = hits.get("total")
    if isinstance(raw_total, bool):
        raw_total = None
    if isinstance(raw_total, (int, float)):
        return int(raw_total)
    if isinstance(raw_total, dict):
        value = raw_total.get("value")
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value:
            return int(value)

    returned = hits.get("hits")
    return len(returned) if isinstance(returned, list) else 0
