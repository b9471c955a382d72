"""
Cache keys for list queries.

A key is a plain tuple ``(resource, search, *filter values, page, limit)``
with filter values in the resource's declared order, so two views asking
for the same data build equal keys. Prefixes such as ``("customers",)``
address every key of a resource at once.
"""

from typing import Any, Mapping, Sequence

from mixer_admin.lib import objects

QueryKey = tuple


def _normalize(value: Any) -> Any:
    # "" and None are both dropped from the request, so they key the same
    if value == "":
        return None
    if isinstance(value, (list, set)):
        return tuple(sorted(value, key=str))
    return value


def list_key(
    resource: str,
    search: str | None,
    filters: Mapping[str, Any],
    filter_names: Sequence[str],
    page: int,
    limit: int,
) -> QueryKey:
    """
    Build the cache key of one list page.

    Args:
        resource: Resource name, e.g. "quotations".
        search: Debounced search term.
        filters: Current filter values.
        filter_names: Filters the resource declares, in key order.
        page: Page number.
        limit: Page size.
    """
    values = tuple(_normalize(filters.get(name)) for name in filter_names)
    return (resource, _normalize((search or "").strip()), *values, int(page), int(limit))


def stats_key(resource: str) -> QueryKey:
    return (resource, "__stats__")


def resource_prefix(resource: str) -> QueryKey:
    return (resource,)


def matches(key: QueryKey, prefix: QueryKey) -> bool:
    """True when ``key`` starts with ``prefix``."""
    return tuple(key[: len(prefix)]) == tuple(prefix)


def key_hash(key: QueryKey) -> str:
    """Stable string form of a key for the disk cache."""
    return objects.hash(list(key)).hexdigest()
