"""Suggestion and listing search script against a running engine.

Configuration via constants below (no CLI args). Run:
	python scripts/search.py

Environment:
	ELASTICSEARCH_URL      (default http://localhost:9200)
	ELASTICSEARCH_API_KEY  (optional)
	SEARCH_LOCALE          (default sk)
"""

from __future__ import annotations

import json
import logging
from typing import List

from artsearch.engine import format_item
from artsearch.engine.schemas import SearchResult
from artsearch.search import Filter, IntegerRange, ItemSearchService, SearchRequest


# ---------------------------------------------------------------------------
# Configuration Constants
# ---------------------------------------------------------------------------
QUERY_TEXT: str = "zátišie"
YEARS: IntegerRange = IntegerRange(**{"from": 1900, "to": 1950})
SORT_BY: str | None = None
TOP_K: int = 5
LOG_LEVEL: str = "INFO"


def search(query: str, top_k: int = TOP_K) -> SearchResult:
	"""Run a suggestion lookup and a filtered listing for the same term.

	Returns the listing result and logs an aggregated multi-line block with both.
	"""
	logger = logging.getLogger(__name__)

	service = ItemSearchService()

	suggestions = service.suggest(top_k, query)
	listing = service.search(
		SearchRequest(filter=Filter(search=query, years=YEARS), sort_by=SORT_BY, size=top_k)
	)

	lines: List[str] = [f"Query: {query!r}"]
	lines.append(f"Suggestions ({len(suggestions)} of {suggestions.total}):")
	for idx, item in enumerate(suggestions, start=1):
		lines.append(f"{idx}. {format_item(item)}")
	lines.append(f"Listing ({len(listing)} of {listing.total}):")
	for idx, item in enumerate(listing, start=1):
		lines.append(f"{idx}. {format_item(item)}")
		if item.author:
			lines.append(f"    author: {item.author}")
		else:
			lines.append(f"    source: {json.dumps(item.source, ensure_ascii=False)[:200]}")
	logger.info("\n".join(lines))
	return listing


def main() -> int:
	logging.basicConfig(
		level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
		format="%(asctime)s %(levelname)s %(name)s - %(message)s",
	)
	try:
		search(QUERY_TEXT, TOP_K)
		return 0
	except Exception as e:  # pragma: no cover
		logging.exception("Search failed: %s", e)
		return 1

if __name__ == "__main__":  # pragma: no cover
	raise SystemExit(main())
