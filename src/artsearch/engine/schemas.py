from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Item:
    id: str
    source: Dict[str, Any] = field(default_factory=dict)
    score: Optional[float] = None

    @property
    def title(self) -> str:
        return self.source.get("title") or ""

    @property
    def author(self) -> str:
        author = self.source.get("author")
        if isinstance(author, list):
            return "; ".join(str(a) for a in author)
        return author or ""

    def short_title(self, max_len: int = 80) -> str:
        # Cut on a word boundary when there is one inside the limit.
        title = " ".join(self.title.split())
        if len(title) <= max_len:
            return title
        cut = title[: max(max_len - 1, 0)]
        if title[len(cut)] != " " and " " in cut:
            cut = cut.rsplit(" ", 1)[0]
        return cut.rstrip(" ,;:") + "\u2026"


@dataclass
class SearchResult:
    """A page of items as returned by the engine.

    ``total`` is the engine's match count and may exceed ``len(collection)``.
    ``raw`` is the untouched engine response, kept for aggregations and debugging.
    """

    collection: List[Item]
    total: int
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    def __len__(self) -> int:
        return len(self.collection)

    def __iter__(self):
        return iter(self.collection)

    def is_empty(self) -> bool:
        return not self.collection

    def get_collection(self) -> List[Item]:
        return list(self.collection)


@dataclass(frozen=True)
class BucketChoice:
    label: str
    value: Any
    count: int


def format_item(item: Item, max_len: int = 80) -> str:
    """One-line summary of a hit for log output, e.g.
    ``id=SVK:SNG.O_184; score=3.2100; title=Zátišie s ovocím``.
    """
    score_str = f"{item.score:.4f}" if item.score is not None else "?"
    return f"id={item.id}; score={score_str}; title={item.short_title(max_len)}"
