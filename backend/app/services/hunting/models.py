from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping


@dataclass(frozen=True)
class FilterSet:
    """
    Hunting filter parameters as received from the query string.

    Values are kept raw (unvalidated strings); ``None`` means the parameter
    was not sent and puts no constraint on the search.
    """

    q: str | None = None
    desc: str | None = None
    agent_id: str | None = None
    agent_name: str | None = None
    manager_name: str | None = None
    group: str | None = None
    rule_id: str | None = None
    level_gte: str | None = None
    level_lte: str | None = None
    start: str | None = None
    end: str | None = None
    page: str | None = None
    size: str | None = None
    sort: str | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "FilterSet":
        values: dict[str, str | None] = {}
        for f in fields(cls):
            raw = params.get(f.name)
            values[f.name] = None if raw is None else str(raw)
        return cls(**values)


class ClauseRole(str, Enum):
    MUST = "must"
    FILTER = "filter"
    SHOULD = "should"


@dataclass(frozen=True)
class Clause:
    role: ClauseRole
    body: dict[str, Any]
