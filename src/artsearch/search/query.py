from __future__ import annotations

from typing import Any, Dict, List, Mapping, NamedTuple, Optional

from .filters import Color, Filter, IntegerRange


class MatchField(NamedTuple):
    field: str
    boost: Optional[float] = None
    analyzer: Optional[str] = None


SYNONYMS_ANALYZER = "synonyms_analyzer"

# Order is kept in the compiled document.
SEARCH_FIELDS = (
    MatchField("identifier", boost=10),
    MatchField("author.folded", boost=5),
    MatchField("title"),
    MatchField("title.folded"),
    MatchField("title.stemmed", analyzer=SYNONYMS_ANALYZER),
    MatchField("tag.folded"),
    MatchField("tag.stemmed"),
    MatchField("place.folded"),
    MatchField("description"),
    MatchField("description.stemmed", boost=0.5, analyzer=SYNONYMS_ANALYZER),
)


def compile_query(filter: Optional[Filter]) -> Optional[Dict[str, Any]]:
    """Compile a filter into an Elasticsearch query document.

    ``None`` means no filtering was requested at all and yields ``None``. A
    filter without any criteria yields ``{}``, which the engine treats as
    match-all; the two cases are kept apart on purpose.
    """
    if filter is None:
        return None

    query: Dict[str, Any] = {}
    query = add_facets_query(query, filter.facets)
    query = add_search_query(query, filter.search)
    query = add_years_query(query, filter.years)
    query = add_color_query(query, filter.color)
    return query


def _bool(query: Dict[str, Any]) -> Dict[str, Any]:
    return query.setdefault("bool", {})


def match_clause(field: MatchField, search: str) -> Dict[str, Any]:
    if field.boost is None and field.analyzer is None:
        return {"match": {field.field: search}}

    spec: Dict[str, Any] = {"query": search}
    if field.analyzer is not None:
        spec["analyzer"] = field.analyzer
    if field.boost is not None:
        spec["boost"] = field.boost
    return {"match": {field.field: spec}}


def add_facets_query(query: Dict[str, Any], facets: Mapping[str, str]) -> Dict[str, Any]:
    for key, value in facets.items():
        _bool(query).setdefault("filter", []).append({"term": {key: value}})
    return query


def add_search_query(query: Dict[str, Any], search: Optional[str]) -> Dict[str, Any]:
    if not search:
        return query

    should: List[Dict[str, Any]] = [match_clause(field, search) for field in SEARCH_FIELDS]

    # The color clause is appended afterwards, so text search owns the group.
    _bool(query)["should"] = should
    _bool(query)["minimum_should_match"] = 1
    return query


def add_years_query(query: Dict[str, Any], years: Optional[IntegerRange]) -> Dict[str, Any]:
    """Add overlap constraints for a dating range.

    An item dated ``[date_earliest, date_latest]`` matches when its span
    overlaps the requested range, not only when it lies fully inside it.
    """
    if years is None:
        return query

    if years.get_from() is not None:
        _bool(query).setdefault("filter", []).append(
            {"range": {"date_latest": {"gte": years.get_from()}}}
        )

    if years.get_to() is not None:
        _bool(query).setdefault("filter", []).append(
            {"range": {"date_earliest": {"lte": years.get_to()}}}
        )

    return query


def add_color_query(query: Dict[str, Any], color: Optional[Color]) -> Dict[str, Any]:
    if color is None:
        return query

    _bool(query).setdefault("should", []).append(
        {
            "descriptor": {
                "color_descriptor": {
                    "hash": "LSH",
                    "descriptor": color.get_descriptor(),
                }
            }
        }
    )
    return query
