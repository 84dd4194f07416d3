"""
Hunting query builder.

Each filter dimension is an independent function ``FilterSet -> list[Clause]``.
``build_query`` collects the contributions in a fixed order, groups them by
role (must / filter / should) and assembles the final OpenSearch query.
Malformed input never raises: the offending clause is dropped or loosened.
"""

from __future__ import annotations

import math
import re
from typing import Any, Callable

from .models import Clause, ClauseRole, FilterSet
from .time_range import TIMESTAMP_FIELD, build_time_range

DESCRIPTION_FIELD = "rule.description"
DESCRIPTION_KEYWORD_FIELD = "rule.description.keyword"
LEVEL_FIELD = "rule.level"
RULE_ID_FIELD = "rule.id"

FREE_TEXT_FIELDS = [
    "rule.description^3",
    "full_log",
    "data.*",
    "agent.name",
    "agent.id",
    "manager.name",
    "rule.id",
    "rule.groups",
    "rule.mitre.*",
]

# Characters with special meaning in query_string syntax.
_QUERY_STRING_SPECIAL_RE = re.compile(r'([+\-=&|<>!(){}\[\]^"~*?:\\/])')


def escape_query_string(value: str) -> str:
    return _QUERY_STRING_SPECIAL_RE.sub(r"\\\1", value)


def _text(value: str | None) -> str | None:
    if value is None:
        return None
    s = value.strip()
    return s or None


def _number(value: str | None) -> int | float | None:
    s = _text(value)
    if s is None:
        return None
    try:
        num = float(s)
    except ValueError:
        return None
    if math.isnan(num) or math.isinf(num):
        return None
    return int(num) if num.is_integer() else num


def time_clauses(filters: FilterSet) -> list[Clause]:
    time_range = build_time_range(filters.start, filters.end)
    if time_range is None:
        return []
    return [Clause(ClauseRole.FILTER, time_range)]


def identity_clauses(filters: FilterSet) -> list[Clause]:
    clauses: list[Clause] = []

    agent_id = _text(filters.agent_id)
    if agent_id:
        clauses.append(Clause(ClauseRole.FILTER, {"term": {"agent.id": agent_id}}))

    for field, value in (
        ("agent.name", filters.agent_name),
        ("manager.name", filters.manager_name),
        ("rule.groups", filters.group),
    ):
        text = _text(value)
        if text:
            clauses.append(Clause(ClauseRole.FILTER, {"match": {field: text}}))

    return clauses


def rule_id_clauses(filters: FilterSet) -> list[Clause]:
    rule_id = _text(filters.rule_id)
    if not rule_id:
        return []
    # rule.id is not mapped uniformly across indices; accept either variant.
    return [
        Clause(ClauseRole.SHOULD, {"term": {RULE_ID_FIELD: rule_id}}),
        Clause(ClauseRole.SHOULD, {"match": {RULE_ID_FIELD: rule_id}}),
    ]


def level_clauses(filters: FilterSet) -> list[Clause]:
    bounds: dict[str, int | float] = {}
    gte = _number(filters.level_gte)
    if gte is not None:
        bounds["gte"] = gte
    lte = _number(filters.level_lte)
    if lte is not None:
        bounds["lte"] = lte
    if not bounds:
        return []
    return [Clause(ClauseRole.FILTER, {"range": {LEVEL_FIELD: bounds}})]


def description_clauses(filters: FilterSet) -> list[Clause]:
    raw = _text(filters.desc)
    if not raw:
        return []

    # Short fragments ("PA") should behave like a log viewer substring search.
    should: list[dict[str, Any]] = [
        {
            "multi_match": {
                "query": raw,
                "type": "best_fields",
                "operator": "or",
                "fuzziness": "AUTO",
                "fields": [f"{DESCRIPTION_FIELD}^3"],
            }
        },
        {"prefix": {DESCRIPTION_FIELD: raw.lower()}},
        {"prefix": {DESCRIPTION_KEYWORD_FIELD: raw}},
        {
            "query_string": {
                "query": f"{escape_query_string(raw)}*",
                "fields": [DESCRIPTION_FIELD],
                "default_operator": "and",
                "lenient": True,
            }
        },
        {
            "bool": {
                "should": [
                    {
                        "wildcard": {
                            field: {"value": f"*{raw}*", "case_insensitive": True}
                        }
                    }
                    for field in (DESCRIPTION_FIELD, DESCRIPTION_KEYWORD_FIELD)
                ],
                "minimum_should_match": 1,
            }
        },
    ]
    return [Clause(ClauseRole.MUST, {"bool": {"should": should, "minimum_should_match": 1}})]


def free_text_clauses(filters: FilterSet) -> list[Clause]:
    text = _text(filters.q)
    if not text:
        return []
    return [
        Clause(
            ClauseRole.MUST,
            {
                "simple_query_string": {
                    "query": text,
                    "default_operator": "and",
                    "lenient": True,
                    "fields": list(FREE_TEXT_FIELDS),
                }
            },
        )
    ]


CLAUSE_BUILDERS: tuple[Callable[[FilterSet], list[Clause]], ...] = (
    time_clauses,
    identity_clauses,
    rule_id_clauses,
    level_clauses,
    description_clauses,
    free_text_clauses,
)


def build_query(filters: FilterSet) -> dict[str, Any]:
    roles: dict[ClauseRole, list[dict[str, Any]]] = {role: [] for role in ClauseRole}
    for builder in CLAUSE_BUILDERS:
        for clause in builder(filters):
            roles[clause.role].append(clause.body)

    must = roles[ClauseRole.MUST]
    filter_ = roles[ClauseRole.FILTER]
    should = roles[ClauseRole.SHOULD]

    if not (must or filter_ or should):
        return {"match_all": {}}

    bool_query: dict[str, Any] = {"must": must, "filter": filter_}
    if should:
        bool_query["should"] = should
        bool_query["minimum_should_match"] = 1
    return {"bool": bool_query}


def build_sort(filters: FilterSet) -> list[dict[str, Any]]:
    order = "asc" if _text(filters.sort) == "asc" else "desc"
    return [{TIMESTAMP_FIELD: {"order": order}}]


def build_search_body(filters: FilterSet, *, offset: int, size: int) -> dict[str, Any]:
    return {
        "track_total_hits": True,
        "query": build_query(filters),
        "sort": build_sort(filters),
        "from": offset,
        "size": size,
    }
