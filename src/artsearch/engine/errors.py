from __future__ import annotations

from typing import Any, Dict, Optional


class SearchError(Exception):
    """Base class for everything raised by the search layer."""


class RetrievalError(SearchError):
    """The engine could not be reached or did not answer in time.

    Distinct from an empty result: callers should treat it as transient.
    """


class EngineError(SearchError):
    """The engine answered, but with an error status (bad sort field, bad query...)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload or {}


class MalformedResponseError(SearchError):
    """The engine response is missing fields we rely on, or a hit cannot be resolved."""


class UnsupportedLocaleError(SearchError, ValueError):
    pass


class ConfigError(SearchError, ValueError):
    pass
