"""
Per-page UI state for a resource list.

A ListStore holds the filters, raw search term, row selection and
mobile-filter visibility of one list page. Stores are created per page
instance and passed in explicitly; ``reset()`` returns one to its defaults.
"""

from typing import Any, Iterable, Mapping

from mixer_admin.lib import logs

LOG = logs.logger(__file__)

DEFAULT_LIMIT = 10


class ListStore:
    """
    Filter, search and selection state of one list page.

    Any change other than the page number sends the view back to page 1;
    the selection only survives while the same rows stay on screen.

    Attributes:
        defaults: Initial filters, ``page`` and ``limit`` included.
        filters: Current filters, ``page`` and ``limit`` included.
        search_term: Raw search input, updated on every keystroke.
        selected: Ids of the selected rows.
        show_mobile_filters: Whether the collapsible filter panel is open.
    """

    def __init__(self, defaults: Mapping[str, Any] | None = None) -> None:
        self.defaults = {"page": 1, "limit": DEFAULT_LIMIT, **(defaults or {})}
        self.filters: dict[str, Any] = dict(self.defaults)
        self.search_term = ""
        self.selected: list[Any] = []
        self.show_mobile_filters = False

    @property
    def page(self) -> int:
        return int(self.filters.get("page") or 1)

    @property
    def limit(self) -> int:
        return int(self.filters.get("limit") or DEFAULT_LIMIT)

    def set_filters(self, **changes: Any) -> None:
        """
        Merge filter changes.

        Changing anything but ``page`` resets ``page`` to 1 and clears the
        selection; an explicit ``page`` in the same call still wins.
        """
        if not changes:
            return
        resets_page = any(name != "page" for name in changes)
        self.filters.update(changes)
        if resets_page and "page" not in changes:
            self.filters["page"] = 1
        self.clear_selection()

    def apply(self, filters: Mapping[str, Any]) -> None:
        """Apply the filter panel: shallow merge then back to page 1."""
        self.set_filters(**{**filters, "page": 1})

    def reset(self) -> None:
        """Restore defaults and clear the search term and selection."""
        self.filters = dict(self.defaults)
        self.search_term = ""
        self.selected = []
        self.show_mobile_filters = False

    def set_search_term(self, term: str) -> None:
        self.search_term = term or ""

    def set_page(self, page: int) -> None:
        self.set_filters(page=max(int(page), 1))

    def set_limit(self, limit: int) -> None:
        self.set_filters(limit=int(limit))

    def toggle_selection(self, item_id: Any) -> None:
        if item_id in self.selected:
            self.selected.remove(item_id)
        else:
            self.selected.append(item_id)

    def select_all(self, item_ids: Iterable[Any]) -> None:
        """Select every row on the page, or clear if all already are."""
        item_ids = list(item_ids)
        if item_ids and set(item_ids) <= set(self.selected):
            self.selected = []
        else:
            self.selected = item_ids

    def clear_selection(self) -> None:
        self.selected = []

    def toggle_mobile_filters(self) -> None:
        self.show_mobile_filters = not self.show_mobile_filters

    def active_filter_count(self) -> int:
        """Number of filters set away from their defaults (page/limit excluded)."""
        return sum(
            1
            for name, value in self.filters.items()
            if name not in ("page", "limit")
            and value not in (None, "")
            and value != self.defaults.get(name)
        )

    def to_dict(self) -> dict:
        return {
            "filters": dict(self.filters),
            "search_term": self.search_term,
            "selected": list(self.selected),
            "show_mobile_filters": self.show_mobile_filters,
        }

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any] | None, defaults: Mapping[str, Any] | None = None
    ) -> "ListStore":
        store = cls(defaults)
        if data:
            store.filters = {**store.defaults, **(data.get("filters") or {})}
            store.search_term = data.get("search_term") or ""
            store.selected = list(data.get("selected") or [])
            store.show_mobile_filters = bool(data.get("show_mobile_filters"))
        return store
