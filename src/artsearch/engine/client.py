from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

import httpx

from .config import EngineSettings
from .errors import EngineError, MalformedResponseError, RetrievalError

logger = logging.getLogger(__name__)


class SearchEngineClient:
    """Thin synchronous client for an Elasticsearch-compatible ``_search`` API.

    Only read operations are exposed; the layer never writes documents.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        api_key: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if api_key:
            headers["Authorization"] = f"ApiKey {api_key}"
        self.base_url = base_url.rstrip("/")
        self._http = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    def __enter__(self) -> "SearchEngineClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def ping(self) -> Dict[str, Any]:
        return self._request("GET", "/")

    def search(
        self,
        index: str,
        body: Dict[str, Any],
        size: Optional[int] = None,
        sort: Optional[List[Any]] = None,
        *,
        offset: Optional[int] = None,
    ) -> Dict[str, Any]:
        payload = dict(body)
        if size is not None:
            payload["size"] = size
        if offset:
            payload["from"] = offset
        if sort is not None:
            payload["sort"] = sort

        logger.debug("Searching index '%s' with body %s", index, payload)
        return self._request("POST", f"/{index}/_search", json=payload)

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self._http.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise RetrievalError(f"Search engine timed out on {method} {path}") from e
        except httpx.HTTPStatusError as e:
            payload = _error_payload(e.response)
            logger.warning(
                "Search engine returned %s for %s %s: %s",
                e.response.status_code,
                method,
                path,
                payload,
            )
            raise EngineError(
                f"Search engine returned {e.response.status_code} for {method} {path}",
                status_code=e.response.status_code,
                payload=payload,
            ) from e
        except httpx.RequestError as e:
            raise RetrievalError(f"Search engine unreachable: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Search engine returned non-JSON body for {method} {path}"
            ) from e
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Search engine returned {type(data).__name__}, expected an object"
            )
        return data


def _error_payload(response: httpx.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {"body": response.text}
    return data if isinstance(data, dict) else {"body": data}


def get_search_client(
    settings: Optional[EngineSettings] = None,
    *,
    wait_ready: bool = True,
    retries: int = 10,
    backoff_sec: float = 1.0,
    transport: Optional[httpx.BaseTransport] = None,
) -> SearchEngineClient:
    """Create a search engine client from settings and optionally wait for readiness.

    Settings default to ``EngineSettings.from_config()``, i.e. the bundled
    config.yaml with ELASTICSEARCH_* environment overrides.
    """
    settings = settings or EngineSettings.from_config()
    client = SearchEngineClient(
        settings.url,
        timeout=settings.timeout,
        api_key=settings.api_key,
        transport=transport,
    )
    logger.info("Created search engine client for %s", settings.url)

    if wait_ready:
        attempts = max(1, retries)
        for i in range(attempts):
            try:
                # A light call to verify connectivity
                client.ping()
                break
            except RetrievalError:
                if i == attempts - 1:
                    client.close()
                    raise
                time.sleep(backoff_sec)
    return client
