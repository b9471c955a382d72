"""
Common list models for the Mixer Admin dashboard.

This module defines the structures every list endpoint shares:

- Pagination: the normalized pagination envelope
- ListPage: one page of records plus its pagination and server message

Records themselves stay plain dictionaries; the backend owns their shape.
Both models include to_dict/from_dict so they can travel through Reflex
state and the disk cache unchanged.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Mapping

Record = dict[str, Any]


def _first(data: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    """Return the first key of ``names`` present in ``data`` with a non-None value."""
    for name in names:
        value = data.get(name)
        if value is not None:
            return value
    return default


@dataclass
class Pagination:
    """
    Pagination state for one page of a list endpoint.

    ``from_item``/``to_item`` are the 1-based inclusive range shown on the
    current page and are both 0 for an empty result.

    Attributes:
        current_page: Current page number (1-indexed).
        per_page: Page size.
        total: Total number of records matching the query.
        total_pages: Number of pages for ``total`` at ``per_page``.
    """

    current_page: int = 1
    per_page: int = 10
    total: int = 0
    total_pages: int = 0

    @classmethod
    def compute(cls, page: int, per_page: int, total: int) -> "Pagination":
        """Build pagination from the three numbers that define it."""
        per_page = max(int(per_page), 1)
        total = max(int(total), 0)
        return cls(
            current_page=max(int(page), 1),
            per_page=per_page,
            total=total,
            total_pages=math.ceil(total / per_page),
        )

    @classmethod
    def from_response(
        cls,
        data: Mapping[str, Any] | None,
        page: int = 1,
        limit: int = 10,
        item_count: int = 0,
    ) -> "Pagination":
        """
        Normalize a backend pagination object.

        Endpoints disagree on spelling (``current_page`` vs ``currentPage``,
        ``total`` vs ``totalItems``); the requested page and limit fill in
        whatever the server left out, and a missing object falls back to the
        number of items returned.

        Args:
            data: Raw ``pagination`` object from the envelope, if any.
            page: Page that was requested.
            limit: Page size that was requested.
            item_count: Number of items in the response body.

        Returns:
            Normalized Pagination.
        """
        data = data or {}
        current_page = _first(data, "current_page", "currentPage", "page", default=page)
        per_page = _first(data, "per_page", "perPage", "limit", default=limit)
        total = _first(
            data, "total", "totalItems", "total_items", "count", default=None
        )
        if total is None:
            total = (max(int(current_page), 1) - 1) * int(per_page) + item_count
        pagination = cls.compute(current_page, per_page, total)
        total_pages = _first(data, "total_pages", "totalPages")
        if total_pages is not None and pagination.total:
            pagination.total_pages = max(int(total_pages), 1)
        return pagination

    @property
    def has_prev_page(self) -> bool:
        """True when a page before the current one exists."""
        return self.current_page > 1 and self.total > 0

    @property
    def has_next_page(self) -> bool:
        """False iff the current page is the last one or nothing matched."""
        return self.total > 0 and self.current_page < self.total_pages

    @property
    def from_item(self) -> int:
        """1-based index of the first item on this page."""
        if self.total == 0:
            return 0
        return min((self.current_page - 1) * self.per_page + 1, self.total)

    @property
    def to_item(self) -> int:
        """1-based index of the last item on this page."""
        if self.total == 0:
            return 0
        return min(self.current_page * self.per_page, self.total)

    def summary(self) -> str:
        """Return the "Showing x to y of z results" line."""
        return f"Showing {self.from_item} to {self.to_item} of {self.total} results"

    def to_dict(self) -> dict:
        """Serialize to the envelope shape, derived fields included."""
        return {
            "current_page": self.current_page,
            "per_page": self.per_page,
            "total": self.total,
            "total_pages": self.total_pages,
            "has_prev_page": self.has_prev_page,
            "has_next_page": self.has_next_page,
            "from": self.from_item,
            "to": self.to_item,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Pagination":
        """Deserialize from ``to_dict`` output."""
        if not data:
            return cls()
        return cls(
            current_page=data.get("current_page", 1),
            per_page=data.get("per_page", 10),
            total=data.get("total", 0),
            total_pages=data.get("total_pages", 0),
        )


@dataclass
class ListPage:
    """
    One page of records returned by a list endpoint.

    Attributes:
        items: Records on this page.
        pagination: Normalized pagination.
        message: Optional server message.
        filters: Filters the server reports as applied.
    """

    items: list[Record] = field(default_factory=list)
    pagination: Pagination = field(default_factory=Pagination)
    message: str | None = None
    filters: dict[str, Any] = field(default_factory=dict)

    def ids(self) -> list[Any]:
        """Return the ``id`` of every record on the page."""
        return [item.get("id") for item in self.items]

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "items": [dict(item) for item in self.items],
            "pagination": self.pagination.to_dict(),
            "message": self.message,
            "filters": dict(self.filters),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ListPage":
        """Deserialize from ``to_dict`` output."""
        if not data:
            return cls()
        return cls(
            items=[dict(item) for item in data.get("items", [])],
            pagination=Pagination.from_dict(data.get("pagination")),
            message=data.get("message"),
            filters=dict(data.get("filters") or {}),
        )
