from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Facets(Mapping[str, str]):
    """Read-only, hashable facet selections in insertion order."""

    __slots__ = ("_items",)

    def __init__(self, items: Any = ()) -> None:
        self._items: Dict[str, str] = dict(items)

    def __getitem__(self, key: str) -> str:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        return hash(frozenset(self._items.items()))

    def __repr__(self) -> str:
        return f"Facets({self._items!r})"


class IntegerRange(BaseModel):
    """Inclusive year range; a missing bound is unbounded on that side."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: Optional[int] = Field(default=None, alias="from", description="Lower bound.")
    to: Optional[int] = Field(default=None, description="Upper bound.")

    def get_from(self) -> Optional[int]:
        return self.from_

    def get_to(self) -> Optional[int]:
        return self.to

    def is_unbounded(self) -> bool:
        return self.from_ is None and self.to is None


class Color(BaseModel):
    """Perceptual-hash color descriptor produced upstream; opaque to this layer."""

    model_config = ConfigDict(frozen=True)

    descriptor: str = Field(..., min_length=1)

    def get_descriptor(self) -> str:
        return self.descriptor


class Filter(BaseModel):
    model_config = ConfigDict(frozen=True)

    search: Optional[str] = Field(default=None, description="Free-text search term.")
    years: Optional[IntegerRange] = Field(default=None, description="Dating range.")
    color: Optional[Color] = Field(default=None, description="Color descriptor.")
    facets: Mapping[str, str] = Field(
        default_factory=Facets,
        description="Exact-match selections keyed by field (e.g. technique, place).",
    )

    @field_validator("search")
    @classmethod
    def _blank_search_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("facets")
    @classmethod
    def _freeze_facets(cls, value: Mapping[str, str]) -> Facets:
        return Facets(value)

    @field_serializer("facets")
    def _dump_facets(self, value: Mapping[str, str]) -> Dict[str, str]:
        return dict(value)

    @field_validator("color", mode="before")
    @classmethod
    def _descriptor_to_color(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"descriptor": value} if value else None
        return value

    @classmethod
    def empty(cls) -> "Filter":
        return cls()

    def get(self, name: str) -> Any:
        """Criterion by name; facets are looked up when no such field exists."""
        if name in type(self).model_fields:
            return getattr(self, name)
        return self.facets.get(name)

    def is_empty(self) -> bool:
        return (
            self.search is None
            and (self.years is None or self.years.is_unbounded())
            and self.color is None
            and not self.facets
        )


class SearchRequest(BaseModel):
    filter: Optional[Filter] = Field(
        default=None, description="Criteria; None matches every item."
    )
    sort_by: Optional[str] = Field(
        default=None, description="Sort key; None applies the default ranking."
    )
    size: int = Field(18, ge=1, le=100, description="Number of items per page.")
    page: int = Field(1, ge=1, description="1-based page number.")

    @field_validator("sort_by")
    @classmethod
    def _blank_sort_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size
