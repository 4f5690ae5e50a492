"""
Data models for the core module.

These are transient values: built for a single request and discarded once the
caller has consumed the result.
"""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class Dataset:
    """Describes where a tabular resource lives: either endpoint + id, or a resource url."""

    id: str | None = None
    endpoint: str | None = None
    url: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Dataset":
        return cls(id=data.get("id"), endpoint=data.get("endpoint"), url=data.get("url"))


@dataclass(frozen=True)
class ResourceTarget:
    """A CKAN API endpoint and the key of a resource on it."""

    endpoint: str
    resource_id: str


@dataclass
class SortField:
    field: str
    order: str | None = None


@dataclass
class Filter:
    type: str
    field: str
    term: Any = None


@dataclass
class Query:
    """Abstract tabular query, independent of the CKAN request shape."""

    text: str | None = None
    page_size: int | None = None
    page_offset: int | None = None
    sort: list[SortField] = field(default_factory=list)
    filters: list[Filter] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Query":
        """
        Build a query from its mapping form.

        Both the long keys (`text`, `page_size`, `page_offset`) and the short ones
        (`q`, `size`, `from`) are accepted, the long ones winning.
        """
        text = data.get("text", data.get("q"))
        page_size = data.get("page_size", data.get("size"))
        page_offset = data.get("page_offset", data.get("from"))
        sort = [
            s if isinstance(s, SortField) else SortField(s["field"], s.get("order"))
            for s in data.get("sort") or []
        ]
        filters = [
            f if isinstance(f, Filter) else Filter(f.get("type"), f.get("field"), f.get("term"))
            for f in data.get("filters") or []
        ]
        return cls(
            text=text, page_size=page_size, page_offset=page_offset, sort=sort, filters=filters
        )


@dataclass
class NormalizedResult:
    """A tabular result whose field types use the canonical vocabulary."""

    fields: list[dict[str, Any]]
    total: int
    hits: list[dict[str, Any]]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
