from __future__ import annotations

import warnings
from datetime import datetime, timedelta, timezone
from typing import Any

from dateutil import parser as date_parser
from dateutil.parser import ParserError, UnknownTimezoneWarning


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_rfc3339(dt: datetime, *, timespec: str = "microseconds") -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec=timespec).replace("+00:00", "Z")


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def from_epoch_millis(millis: int) -> datetime:
    return _EPOCH + timedelta(milliseconds=millis)


# Two defaults that differ in every date part: a field the input left out shows
# up as a mismatch, so "10:00" or "5" is rejected instead of borrowing today's date.
_FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def _parse_free_form(s: str) -> datetime | None:
    """Parse free-form input such as "Jan 5 2024 10:00" or RFC 2822 dates."""
    try:
        with warnings.catch_warnings():
            # An unknown zone name cannot be pinned to an instant.
            warnings.simplefilter("error", UnknownTimezoneWarning)
            first, second = (date_parser.parse(s, default=d) for d in _FILL_DEFAULTS)
    except (ParserError, UnknownTimezoneWarning, ValueError, OverflowError):
        return None
    if first != second:
        return None
    return first


def parse_datetime(value: Any) -> datetime | None:
    """Parse a calendar date/time string; naive values are taken as UTC."""
    if value is None:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if not isinstance(value, str):
        return None

    s = value.strip()
    if not s:
        return None

    iso = s[:-1] + "+00:00" if s.endswith("Z") else s
    try:
        dt = datetime.fromisoformat(iso)
    except ValueError:
        dt = _parse_free_form(s)
        if dt is None:
            return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def utc_now_rfc3339() -> str:
    return format_rfc3339(utc_now())
