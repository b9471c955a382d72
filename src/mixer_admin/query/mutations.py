"""
Optimistic mutations over cached list pages.

A mutation edits the cached page before the server answers. Edits to the
same key that overlap are tracked together: the page as it was before the
first of them is kept as the base, a successful edit is folded into that
base, and a rejected one rebuilds the page from the base plus the edits
still awaiting the server. A rejected edit therefore never stays applied,
and an accepted one is never undone by a later rollback.
"""

import asyncio
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Iterable, Mapping, Sequence, TypeVar

from mixer_admin.lib import logs
from mixer_admin.models.common import ListPage, Pagination
from mixer_admin.query.cache import CachedQuery
from mixer_admin.query.client import QueryClient
from mixer_admin.query.keys import QueryKey
from mixer_admin.services.errors import OptimisticRollbackError
from mixer_admin.services.notifications import Notifier

LOG = logs.logger(__file__)

T = TypeVar("T")
Transform = Callable[[ListPage], ListPage]


def remove_item(item_id: Any) -> Transform:
    """Transform dropping the record ``item_id`` from a page."""

    def transform(page: ListPage) -> ListPage:
        items = [item for item in page.items if item.get("id") != item_id]
        removed = len(page.items) - len(items)
        pagination = page.pagination
        return ListPage(
            items=items,
            pagination=Pagination.compute(
                pagination.current_page, pagination.per_page, pagination.total - removed
            ),
            message=page.message,
            filters=dict(page.filters),
        )

    return transform


def patch_items(item_ids: Iterable[Any], changes: Mapping[str, Any]) -> Transform:
    """Transform merging ``changes`` into every record in ``item_ids``."""
    targets = set(item_ids)

    def transform(page: ListPage) -> ListPage:
        items = [
            {**item, **changes} if item.get("id") in targets else dict(item)
            for item in page.items
        ]
        return ListPage(
            items=items,
            pagination=page.pagination,
            message=page.message,
            filters=dict(page.filters),
        )

    return transform


def patch_item(item_id: Any, changes: Mapping[str, Any]) -> Transform:
    return patch_items([item_id], changes)


@dataclass
class PendingEdits:
    """
    Optimistic edits of one key still awaiting the server.

    Attributes:
        base: Entry before the first pending edit, with accepted edits
              folded in; None when the key was not cached.
        transforms: Edits in the order they were applied.
    """

    base: CachedQuery | None
    transforms: list[Transform] = field(default_factory=list)

    def accept(self, transform: Transform) -> None:
        self.transforms.remove(transform)
        if self.base is not None and self.base.data is not None:
            # the server changed, so the folded base is stale
            self.base = replace(self.base, data=transform(self.base.data), invalidated=True)

    def reject(self, transform: Transform) -> CachedQuery | None:
        """Drop ``transform`` and return the entry to restore."""
        self.transforms.remove(transform)
        if self.base is None or self.base.data is None:
            return self.base
        data = self.base.data
        for pending in self.transforms:
            data = pending(data)
        return replace(self.base, data=data)


class OptimisticMutation:
    """Runs server mutations with an optimistic edit of one cached page."""

    def __init__(self, client: QueryClient, notifier: Notifier) -> None:
        self.client = client
        self.notifier = notifier

    async def run(
        self,
        key: QueryKey,
        transform: Transform,
        request: Callable[[], Awaitable[T]],
        invalidate: Sequence[QueryKey] = (),
    ) -> T:
        """
        Apply ``transform`` to the page at ``key``, then call the server.

        Args:
            key: Cache key of the page being edited.
            transform: Optimistic edit of the cached page.
            request: Coroutine factory performing the server mutation.
            invalidate: Key prefixes to mark stale after success.

        Returns:
            Whatever ``request`` returned.

        Raises:
            OptimisticRollbackError: The request failed; the page shows
                the accepted edits and the ones still pending, not this one.
        """
        key = tuple(key)
        edits = self.client.pending_edits.get(key)
        if edits is None:
            edits = PendingEdits(self.client.cache.snapshot(key))
            self.client.pending_edits[key] = edits
        self.client.cancel_queries(key)
        current = self.client.cache.get(key)
        if current is not None and current.data is not None:
            self.client.set_query_data(key, transform(current.data))
        edits.transforms.append(transform)

        try:
            result = await request()
        except asyncio.CancelledError:
            self.client.cache.restore(key, edits.reject(transform))
            self._settle(key, edits)
            raise
        except Exception as exc:
            self.client.cache.restore(key, edits.reject(transform))
            self._settle(key, edits)
            error = OptimisticRollbackError.from_error(exc)
            LOG.warning("mutation on %s rolled back: %s", key, error.message)
            if not error.notified:
                self.notifier.error(error.message)
                error.notified = True
            raise error from exc

        edits.accept(transform)
        self._settle(key, edits)
        for prefix in invalidate:
            self.client.invalidate_queries(prefix)
        return result

    def _settle(self, key: tuple, edits: PendingEdits) -> None:
        if not edits.transforms and self.client.pending_edits.get(key) is edits:
            del self.client.pending_edits[key]
