from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from artsearch.engine.client import SearchEngineClient, get_search_client
from artsearch.engine.config import EngineSettings
from artsearch.engine.locale import LocaleResolver
from artsearch.engine.schemas import BucketChoice, Item, SearchResult
from artsearch.utils.names import format_name

from .filters import Filter, SearchRequest
from .normalizer import Hydrator, decode_buckets, normalize
from .query import compile_query
from .sorting import SCORE, build_sort, directive

logger = logging.getLogger(__name__)

SUGGEST_FIELDS = ["identifier", "title.suggest", "author.suggest"]

SIMILAR_FIELDS = [
    "author.folded",
    "title",
    "title.stemmed",
    "description.stemmed",
    "tag.folded",
    "place",
    "technique",
]


@dataclass(frozen=True)
class SearchServiceConfig:
    index: str = "items"
    choices_size: int = 50


class ItemSearchService:
    """Read-only item retrieval against the per-locale item indices.

    Implements:
      1) Autocomplete suggestions
      2) Items similar to a given item
      3) Preview items of an authority
      4) Filtered, sorted and paginated listing
      5) Facet choices for filter forms

    Every call resolves the locale-qualified index first, so each language
    is searched with its own analyzers and synonyms.
    """

    def __init__(
        self,
        config: SearchServiceConfig | None = None,
        *,
        client: Optional[SearchEngineClient] = None,
        locales: Optional[LocaleResolver] = None,
        name_formatter: Callable[[str], str] = format_name,
        hydrate: Optional[Hydrator] = None,
    ):
        if client is None or locales is None:
            settings = EngineSettings.from_config()
            config = config or SearchServiceConfig(index=settings.items_index)
            client = client or get_search_client(settings)
            locales = locales or LocaleResolver.from_settings(settings)

        self.config = config or SearchServiceConfig()
        self.client = client
        self.locales = locales
        self.name_formatter = name_formatter
        self.hydrate = hydrate

    def index_name(self, locale: Optional[str] = None) -> str:
        return self.locales.index_name_for(self.config.index, locale)

    def suggest(self, size: int, search: str, locale: Optional[str] = None) -> SearchResult:
        """Autocomplete: every term must match across identifier, title and author."""
        body = {
            "query": {
                "multi_match": {
                    "query": search,
                    "type": "cross_fields",
                    "fields": list(SUGGEST_FIELDS),
                    "operator": "and",
                }
            }
        }
        return self._search(body, size=size, locale=locale)

    def find_similar(self, size: int, item: Any, locale: Optional[str] = None) -> SearchResult:
        """Items sharing content with ``item``; illustrated ones rank higher."""
        index = self.index_name(locale)
        body = {
            "query": {
                "bool": {
                    "must": [
                        {
                            "more_like_this": {
                                "like": [{"_index": index, "_id": _identify(item)}],
                                "fields": list(SIMILAR_FIELDS),
                                "min_term_freq": 1,
                                "min_doc_freq": 1,
                                "minimum_should_match": 1,
                                "min_word_length": 1,
                            }
                        }
                    ],
                    "should": [
                        {"term": {"has_image": {"value": True, "boost": 10}}},
                        {"term": {"has_iip": True}},
                    ],
                }
            }
        }
        return self._search(body, size=size, index=index)

    def preview_for(self, size: int, authority: Any, locale: Optional[str] = None) -> List[Item]:
        """A few representative items of an authority, earliest catalogued first."""
        body = {
            "query": {
                "bool": {
                    "must": [{"term": {"authority_id": _identify(authority)}}],
                    "should": [
                        {"term": {"has_image": True}},
                        {"term": {"has_iip": True}},
                    ],
                }
            }
        }
        sort = [SCORE, directive("created_at", "asc")]
        return self._search(body, size=size, sort=sort, locale=locale).get_collection()

    def search(self, request: SearchRequest, locale: Optional[str] = None) -> SearchResult:
        return self._search(
            _with_query({}, request.filter),
            size=request.size,
            sort=build_sort(request.sort_by),
            offset=request.offset,
            locale=locale,
        )

    def list_choices(
        self,
        attribute: str,
        size: Optional[int] = None,
        filter: Optional[Filter] = None,
        locale: Optional[str] = None,
    ) -> List[BucketChoice]:
        """Facet values (with counts) among the items matching ``filter``."""
        body: Dict[str, Any] = {
            "aggs": {
                attribute: {
                    "terms": {
                        "field": attribute,
                        "size": size or self.config.choices_size,
                    }
                }
            }
        }
        body = _with_query(body, filter)

        raw = self.client.search(self.index_name(locale), body, size=0)
        return decode_buckets(raw, attribute, formatter=self.name_formatter)

    def count(self, filter: Optional[Filter] = None, locale: Optional[str] = None) -> int:
        body = _with_query({"track_total_hits": True}, filter)
        return self._search(body, size=0, locale=locale).total

    def _search(
        self,
        body: Dict[str, Any],
        *,
        size: int,
        sort: Optional[List[Any]] = None,
        offset: Optional[int] = None,
        locale: Optional[str] = None,
        index: Optional[str] = None,
    ) -> SearchResult:
        index = index or self.index_name(locale)
        raw = self.client.search(index, body, size=size, sort=sort, offset=offset)
        result = normalize(raw, hydrate=self.hydrate)
        logger.debug(
            "Index '%s' returned %d of %d items", index, len(result), result.total
        )
        return result


def _with_query(body: Dict[str, Any], filter: Optional[Filter]) -> Dict[str, Any]:
    """Attach the compiled filter to a request body.

    No filter leaves the body without a query. A filter without criteria
    compiles to an empty document, which the engine refuses to parse, so it
    is sent as an explicit match_all.
    """
    query = compile_query(filter)
    if query is None:
        return body
    return {**body, "query": query or {"match_all": {}}}


def _identify(value: Any) -> Any:
    """Accept either a model-like object with an ``id`` or a bare id."""
    return getattr(value, "id", value)
