"""
Flatten Wazuh alert hits into fixed-shape rows.

Both the hunting table and the FIM event list use the same field table; a
``RowProfile`` picks which entries apply. Every entry has a placeholder so a
row is always complete, however sparse the source document is.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

PLACEHOLDER = "-"

_MISSING = object()


class RowProfile(str, Enum):
    HUNTING = "hunting"
    FIM = "fim"


@dataclass(frozen=True)
class FieldSpec:
    key: str
    # Candidate paths tried in order; the first present value wins.
    paths: tuple[str, ...]
    default: Any
    # False keeps falsy values such as 0 or "" (rule level / rule id).
    empty_is_missing: bool = True


_BOTH = frozenset({RowProfile.HUNTING, RowProfile.FIM})
_HUNTING = frozenset({RowProfile.HUNTING})
_FIM = frozenset({RowProfile.FIM})

# (profiles, entry); row keys keep this order.
# FIM username order (audit login user, then file owner after/before change)
# is a display policy, not something derived from the data.
FIELD_TABLE: tuple[tuple[frozenset[RowProfile], FieldSpec], ...] = (
    (_BOTH, FieldSpec("timestamp", ("@timestamp",), None)),
    (_HUNTING, FieldSpec("agentId", ("agent.id",), PLACEHOLDER)),
    (_BOTH, FieldSpec("agentName", ("agent.name",), PLACEHOLDER)),
    (_HUNTING, FieldSpec("managerName", ("manager.name",), PLACEHOLDER)),
    (
        _FIM,
        FieldSpec(
            "username",
            ("syscheck.audit.login_user.name", "syscheck.uname_after", "syscheck.uname"),
            PLACEHOLDER,
        ),
    ),
    (_FIM, FieldSpec("syscheckPath", ("syscheck.path",), None)),
    (_FIM, FieldSpec("syscheckEvent", ("syscheck.event",), None)),
    (_BOTH, FieldSpec("ruleId", ("rule.id",), PLACEHOLDER, empty_is_missing=False)),
    (_HUNTING, FieldSpec("ruleLevel", ("rule.level",), PLACEHOLDER, empty_is_missing=False)),
    (_FIM, FieldSpec("ruleLevel", ("rule.level",), 0, empty_is_missing=False)),
    (_BOTH, FieldSpec("ruleDescription", ("rule.description",), PLACEHOLDER)),
    (_HUNTING, FieldSpec("groups", ("rule.groups",), [])),
    (_HUNTING, FieldSpec("location", ("location", "decoder.name"), PLACEHOLDER)),
    (_HUNTING, FieldSpec("fullLog", ("full_log",), None)),
    (_FIM, FieldSpec("fileDiff", ("syscheck.diff",), None)),
)


def get_path(source: Any, path: str) -> Any:
    """Dotted lookup that returns ``_MISSING`` instead of raising."""
    current = source
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _resolve(source: dict[str, Any], entry: FieldSpec) -> Any:
    for path in entry.paths:
        value = get_path(source, path)
        if value is _MISSING or value is None:
            continue
        if entry.empty_is_missing and not value:
            continue
        return value
    # Fresh copy so rows never share a mutable placeholder.
    return list(entry.default) if isinstance(entry.default, list) else entry.default


def normalize_hit(hit: Any, profile: RowProfile = RowProfile.HUNTING) -> dict[str, Any]:
    hit = hit if isinstance(hit, dict) else {}
    source = hit.get("_source")
    if not isinstance(source, dict):
        source = {}

    row: dict[str, Any] = {"id": hit.get("_id")}
    for profiles, entry in FIELD_TABLE:
        if profile in profiles:
            row[entry.key] = _resolve(source, entry)
    return row


def normalize_hits(hits: Iterable[Any], profile: RowProfile = RowProfile.HUNTING) -> list[dict[str, Any]]:
    return [normalize_hit(hit, profile) for hit in hits]
