"""Search engine access: HTTP client, configuration, locale-qualified indices
and the result types shared with the search layer."""

from .client import SearchEngineClient, get_search_client
from .config import EngineSettings, load_config
from .errors import (
    ConfigError,
    EngineError,
    MalformedResponseError,
    RetrievalError,
    SearchError,
    UnsupportedLocaleError,
)
from .locale import LocaleResolver
from .schemas import BucketChoice, Item, SearchResult, format_item

__all__ = [
    "BucketChoice",
    "ConfigError",
    "EngineError",
    "EngineSettings",
    "Item",
    "LocaleResolver",
    "MalformedResponseError",
    "RetrievalError",
    "SearchEngineClient",
    "SearchError",
    "SearchResult",
    "UnsupportedLocaleError",
    "format_item",
    "get_search_client",
    "load_config",
]
