"""
Query layer: cached, deduplicated, retrying list fetches.

This package provides:
- QueryCache: disk-backed results with staleness and eviction
- QueryClient: fetch through the cache, dedupe, retry, soft-cancel
- ListQuery: what a page shows and whether it is loading
- OptimisticMutation: edit the cache first, roll back on failure
- Debouncer: emit search input after a quiet period
"""

from mixer_admin.query.cache import CachedQuery, QueryCache
from mixer_admin.query.client import QueryClient
from mixer_admin.query.debounce import Debouncer
from mixer_admin.query.mutations import (
    OptimisticMutation,
    patch_item,
    patch_items,
    remove_item,
)
from mixer_admin.query.observer import ListQuery, QueryStatus

__all__ = [
    "CachedQuery",
    "Debouncer",
    "ListQuery",
    "OptimisticMutation",
    "QueryCache",
    "QueryClient",
    "QueryStatus",
    "patch_item",
    "patch_items",
    "remove_item",
]
