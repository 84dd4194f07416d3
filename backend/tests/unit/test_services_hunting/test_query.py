from __future__ import annotations

import json

import pytest

from app.services.hunting.models import FilterSet
from app.services.hunting.query import (
    FREE_TEXT_FIELDS,
    build_query,
    build_search_body,
    escape_query_string,
)


pytestmark = [pytest.mark.unit]


def _bool(query):
    assert "bool" in query
    return query["bool"]


def test_empty_filters_match_everything():
    assert build_query(FilterSet()) == {"match_all": {}}


def test_from_params_keeps_absent_keys_as_none():
    filters = FilterSet.from_params({"desc": "PA", "page": "1"})
    assert filters.desc == "PA"
    assert filters.page == "1"
    assert filters.agent_id is None
    assert filters.q is None


def test_blank_values_contribute_nothing():
    filters = FilterSet(q="   ", desc="", agent_id="", rule_id=" ", level_gte="", level_lte="  ")
    assert build_query(filters) == {"match_all": {}}


def test_description_scenario():
    filters = FilterSet.from_params({"desc": "PA", "page": "1", "size": "50"})
    body = build_search_body(filters, offset=0, size=50)

    query = _bool(body["query"])
    assert len(query["must"]) == 1
    wrapper = _bool(query["must"][0])
    assert wrapper["minimum_should_match"] == 1
    assert len(wrapper["should"]) == 5
    assert query["filter"] == []
    assert "should" not in query
    assert body["from"] == 0
    assert body["size"] == 50
    assert body["track_total_hits"] is True


def test_description_sub_clauses():
    query = build_query(FilterSet(desc="Login Fail"))
    should = query["bool"]["must"][0]["bool"]["should"]

    multi_match = should[0]["multi_match"]
    assert multi_match["query"] == "Login Fail"
    assert multi_match["fuzziness"] == "AUTO"
    assert multi_match["fields"] == ["rule.description^3"]

    assert should[1] == {"prefix": {"rule.description": "login fail"}}
    assert should[2] == {"prefix": {"rule.description.keyword": "Login Fail"}}

    query_string = should[3]["query_string"]
    assert query_string["fields"] == ["rule.description"]
    assert query_string["lenient"] is True

    wildcards = should[4]["bool"]["should"]
    assert should[4]["bool"]["minimum_should_match"] == 1
    assert wildcards == [
        {"wildcard": {"rule.description": {"value": "*Login Fail*", "case_insensitive": True}}},
        {"wildcard": {"rule.description.keyword": {"value": "*Login Fail*", "case_insensitive": True}}},
    ]


def test_description_is_trimmed():
    query = build_query(FilterSet(desc="  sshd  "))
    should = query["bool"]["must"][0]["bool"]["should"]
    assert should[0]["multi_match"]["query"] == "sshd"


@pytest.mark.parametrize("char", list('+-=&|<>!(){}[]^"~*?:\\/'))
def test_query_string_escapes_special_characters(char):
    query = build_query(FilterSet(desc=f"a{char}b"))
    text = query["bool"]["must"][0]["bool"]["should"][3]["query_string"]["query"]
    assert text == f"a\\{char}b*"


def test_escape_query_string_multiple():
    assert escape_query_string('C:\\Windows/(x86) "a"') == 'C\\:\\\\Windows\\/\\(x86\\) \\"a\\"'


def test_free_text_clause():
    query = build_query(FilterSet(q="sshd AND root"))
    clause = query["bool"]["must"][0]["simple_query_string"]
    assert clause["query"] == "sshd AND root"
    assert clause["default_operator"] == "and"
    assert clause["lenient"] is True
    assert clause["fields"] == FREE_TEXT_FIELDS
    assert clause["fields"][0] == "rule.description^3"


def test_description_before_free_text():
    query = build_query(FilterSet(q="root", desc="sshd"))
    must = query["bool"]["must"]
    assert "bool" in must[0]
    assert "simple_query_string" in must[1]


def test_identity_filters():
    query = build_query(
        FilterSet(agent_id="001", agent_name="web-01", manager_name="mgr", group="sshd")
    )
    assert query["bool"]["filter"] == [
        {"term": {"agent.id": "001"}},
        {"match": {"agent.name": "web-01"}},
        {"match": {"manager.name": "mgr"}},
        {"match": {"rule.groups": "sshd"}},
    ]
    assert query["bool"]["must"] == []
    assert "should" not in query["bool"]


def test_rule_id_adds_should_with_minimum_match():
    query = build_query(FilterSet(rule_id="5710"))
    assert query["bool"]["should"] == [
        {"term": {"rule.id": "5710"}},
        {"match": {"rule.id": "5710"}},
    ]
    assert query["bool"]["minimum_should_match"] == 1


def test_level_lower_bound_only():
    query = build_query(FilterSet.from_params({"level_gte": "8", "level_lte": ""}))
    assert query["bool"]["filter"] == [{"range": {"rule.level": {"gte": 8}}}]


def test_level_both_bounds():
    query = build_query(FilterSet(level_gte="3", level_lte="12.5"))
    assert query["bool"]["filter"] == [{"range": {"rule.level": {"gte": 3, "lte": 12.5}}}]


def test_unparseable_level_is_dropped_not_zeroed():
    query = build_query(FilterSet(level_gte="high", level_lte="10"))
    assert query["bool"]["filter"] == [{"range": {"rule.level": {"lte": 10}}}]

    assert build_query(FilterSet(level_gte="nan", level_lte="abc")) == {"match_all": {}}


def test_time_filter_comes_first():
    query = build_query(FilterSet(start="1700000000", agent_id="001"))
    assert query["bool"]["filter"][0] == {
        "range": {"@timestamp": {"gte": "2023-11-14T22:13:20.000Z"}}
    }
    assert query["bool"]["filter"][1] == {"term": {"agent.id": "001"}}


def test_invalid_time_contributes_nothing():
    assert build_query(FilterSet(start="garbage", end="")) == {"match_all": {}}


@pytest.mark.parametrize(
    "sort, expected",
    [(None, "desc"), ("desc", "desc"), ("asc", "asc"), ("ASC", "desc"), ("random", "desc")],
)
def test_sort_order(sort, expected):
    body = build_search_body(FilterSet(sort=sort), offset=0, size=50)
    assert body["sort"] == [{"@timestamp": {"order": expected}}]


def test_search_body_shape():
    body = build_search_body(FilterSet(), offset=100, size=25)
    assert set(body) == {"track_total_hits", "query", "sort", "from", "size"}
    assert body["from"] == 100
    assert body["size"] == 25


def test_build_query_is_deterministic():
    params = {
        "q": "root",
        "desc": "PA",
        "agent_id": "001",
        "agent_name": "web",
        "manager_name": "mgr",
        "group": "sshd",
        "rule_id": "5710",
        "level_gte": "3",
        "level_lte": "10",
        "start": "1700000000",
        "end": "1700000000000",
        "sort": "asc",
    }
    first = build_search_body(FilterSet.from_params(params), offset=0, size=50)
    second = build_search_body(FilterSet.from_params(dict(reversed(list(params.items())))), offset=0, size=50)
    assert json.dumps(first) == json.dumps(second)
