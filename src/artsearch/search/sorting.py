from __future__ import annotations

from typing import Any, List, Optional

SCORE = "_score"

# Relevance first, then items with images and deep zoom, then recently touched ones.
DEFAULT_SORT = (
    SCORE,
    ("has_image", "desc"),
    ("has_iip", "desc"),
    ("updated_at", "desc"),
    ("created_at", "desc"),
)

ASCENDING_KEYS = frozenset({"author", "title", "oldest"})

# Both refer to the dating of the artwork, not to the catalogue record.
SORT_ALIASES = {
    "newest": "date_earliest",
    "oldest": "date_earliest",
}


def directive(field: str, order: str) -> Any:
    return {field: {"order": order}}


def build_sort(sort_by: Optional[str]) -> List[Any]:
    """Sort directives for a requested sort key.

    Unknown keys are used as field names as-is; the engine rejects the ones
    that do not exist.
    """
    if sort_by is None:
        return [
            entry if entry == SCORE else directive(*entry) for entry in DEFAULT_SORT
        ]

    field = SORT_ALIASES.get(sort_by, sort_by)
    order = "asc" if sort_by in ASCENDING_KEYS else "desc"
    return [directive(field, order)]
