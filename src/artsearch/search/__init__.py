"""Search application layer.

This package turns user search criteria into engine queries and engine
responses back into results:
- Filter value objects and the filter-to-query compiler
- The sort policy for listings
- Retrieval strategies (suggestions, similar items, authority previews)
- Normalization of hits and facet aggregations

Engine access itself lives in ``artsearch.engine``.
"""

from .filters import Color, Filter, IntegerRange, SearchRequest
from .normalizer import decode_buckets, normalize
from .query import SEARCH_FIELDS, compile_query
from .service import ItemSearchService, SearchServiceConfig
from .sorting import build_sort

__all__ = [
    "Color",
    "Filter",
    "IntegerRange",
    "ItemSearchService",
    "SEARCH_FIELDS",
    "SearchRequest",
    "SearchServiceConfig",
    "build_sort",
    "compile_query",
    "decode_buckets",
    "normalize",
]
