from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from artsearch.engine.errors import MalformedResponseError
from artsearch.engine.schemas import BucketChoice, Item, SearchResult
from artsearch.utils.names import format_name

Hydrator = Callable[[Dict[str, Any]], Item]

# Facets whose keys are stored as "Surname, Given names".
NAME_ATTRIBUTES = frozenset({"author"})


def hit_to_item(hit: Dict[str, Any]) -> Item:
    """Build an Item straight from a hit's ``_id`` and ``_source``."""
    if not isinstance(hit, dict) or hit.get("_id") is None:
        raise MalformedResponseError(f"Hit without '_id': {hit!r}")

    score = hit.get("_score")
    source = hit.get("_source")
    return Item(
        id=str(hit["_id"]),
        source=source if isinstance(source, dict) else {},
        score=float(score) if score is not None else None,
    )


def extract_total(hits: Dict[str, Any]) -> int:
    # Elasticsearch 7+ reports {"value": n, "relation": "eq"}, older versions a bare int.
    total = hits.get("total")
    if isinstance(total, dict):
        total = total.get("value")
    if isinstance(total, bool) or not isinstance(total, int):
        raise MalformedResponseError(f"Response has no usable 'hits.total': {total!r}")
    return total


def normalize(raw: Dict[str, Any], hydrate: Optional[Hydrator] = None) -> SearchResult:
    """Convert a raw engine response into a SearchResult.

    Hits keep the engine order. A hit that cannot be turned into an Item
    raises MalformedResponseError instead of being skipped, so the collection
    never silently disagrees with ``total``.
    """
    hydrate = hydrate or hit_to_item

    hits = raw.get("hits") if isinstance(raw, dict) else None
    if not isinstance(hits, dict):
        raise MalformedResponseError("Response has no 'hits' block")

    total = extract_total(hits)
    raw_hits = hits.get("hits")
    if not isinstance(raw_hits, list):
        raise MalformedResponseError("Response has no 'hits.hits' list")

    items: List[Item] = []
    for position, hit in enumerate(raw_hits):
        try:
            item = hydrate(hit)
        except MalformedResponseError:
            raise
        except Exception as e:
            raise MalformedResponseError(
                f"Hit #{position} ({_hit_id(hit)}) could not be resolved: {e}"
            ) from e
        if item is None:
            raise MalformedResponseError(f"Hit #{position} ({_hit_id(hit)}) did not resolve")
        items.append(item)

    return SearchResult(collection=items, total=total, raw=raw)


def _hit_id(hit: Any) -> str:
    return str(hit.get("_id")) if isinstance(hit, dict) else "?"


def decode_buckets(
    raw: Dict[str, Any],
    attribute: str,
    formatter: Callable[[str], str] = format_name,
) -> List[BucketChoice]:
    """Turn a terms aggregation into labelled choices, in engine bucket order.

    Author keys are shown through ``formatter`` but the choice value stays the
    raw key, since that is what a filter has to match.
    """
    try:
        buckets = raw["aggregations"][attribute]["buckets"]
    except (KeyError, TypeError) as e:
        raise MalformedResponseError(
            f"Response has no buckets for aggregation '{attribute}'"
        ) from e

    if not isinstance(buckets, list):
        raise MalformedResponseError(f"Buckets of '{attribute}' are not a list: {buckets!r}")

    choices: List[BucketChoice] = []
    for bucket in buckets:
        if not isinstance(bucket, dict):
            raise MalformedResponseError(f"Bucket in '{attribute}' is not an object: {bucket!r}")
        key = bucket.get("key")
        count = bucket.get("doc_count")
        if key is None or count is None:
            raise MalformedResponseError(f"Incomplete bucket in '{attribute}': {bucket!r}")

        shown = formatter(key) if attribute in NAME_ATTRIBUTES else key
        choices.append(BucketChoice(label=f"{shown} ({int(count)})", value=key, count=int(count)))
    return choices
