"""
Time range handling for hunting queries.

Accepted inputs for ``start``/``end``:
  - 10 digits: epoch seconds
  - 13 digits: epoch milliseconds
  - anything the generic date parser understands (ISO 8601, "Jan 5 2024", ...)

Invalid values are treated as absent; they never fail the request.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from app.core.time import format_rfc3339, from_epoch_millis, parse_datetime

TIMESTAMP_FIELD = "@timestamp"

_EPOCH_SECONDS_RE = re.compile(r"^\d{10}$")
_EPOCH_MILLIS_RE = re.compile(r"^\d{13}$")


def _to_datetime(value: Any) -> datetime | None:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    try:
        if _EPOCH_MILLIS_RE.match(s):
            return from_epoch_millis(int(s))
        if _EPOCH_SECONDS_RE.match(s):
            return from_epoch_millis(int(s) * 1000)
    except (ValueError, OverflowError, OSError):
        return None
    return parse_datetime(s)


def is_valid_time_value(value: Any) -> bool:
    return _to_datetime(value) is not None


def normalize_time_value(value: Any) -> str | None:
    """Return the value as an RFC 3339 UTC instant with millisecond precision."""
    dt = _to_datetime(value)
    if dt is None:
        return None
    return format_rfc3339(dt, timespec="milliseconds")


def build_time_range(start: Any, end: Any) -> dict[str, Any] | None:
    bounds: dict[str, str] = {}

    gte = normalize_time_value(start)
    if gte is not None:
        bounds["gte"] = gte
    lte = normalize_time_value(end)
    if lte is not None:
        bounds["lte"] = lte

    # An empty range object would still restrict results; "no constraint" is None.
    if not bounds:
        return None
    return {"range": {TIMESTAMP_FIELD: bounds}}
