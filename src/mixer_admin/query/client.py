"""
Fetching through the query cache.

QueryClient decides whether a load needs the network, shares one request
among concurrent loads of the same key, retries transient failures with
exponential backoff, and lets mutations soft-cancel fetches whose results
would overwrite an optimistic edit.
"""

import asyncio
from typing import Any, Awaitable, Callable

from mixer_admin import config
from mixer_admin.lib import logs
from mixer_admin.query.cache import QueryCache
from mixer_admin.query.keys import QueryKey, matches
from mixer_admin.services.errors import ApiError

LOG = logs.logger(__file__)

Fetcher = Callable[[], Awaitable[Any]]


class QueryClient:
    """
    Cache-aware fetcher.

    Attributes:
        cache: Backing QueryCache.
        stale_time: Seconds a result is served without refetching.
        retry: Extra attempts after a retryable failure.
        retry_delay: Base delay of the exponential backoff.
        pending_edits: Optimistic edits awaiting the server, by key.
    """

    def __init__(
        self,
        cache: QueryCache,
        stale_time: float = config.STALE_SECONDS,
        retry: int = config.FETCH_RETRIES,
        retry_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.cache = cache
        self.stale_time = stale_time
        self.retry = retry
        self.retry_delay = retry_delay
        self._sleep = sleep
        self._inflight: dict[tuple, asyncio.Task] = {}
        self._generations: dict[tuple, int] = {}
        self.pending_edits: dict[tuple, Any] = {}

    async def fetch_query(
        self,
        key: QueryKey,
        fn: Fetcher,
        stale_time: float | None = None,
        force: bool = False,
    ) -> Any:
        """
        Return data for ``key``, fetching only when needed.

        A fresh cache entry is returned as is unless ``force`` is set. A
        fetch already running for ``key`` is joined instead of starting a
        second one.

        Args:
            key: Query key.
            fn: Coroutine factory performing the request.
            stale_time: Override of the client's stale time.
            force: Fetch even when the cached entry is fresh.

        Raises:
            ApiError: The fetch failed after its retries.
        """
        key = tuple(key)
        stale_time = self.stale_time if stale_time is None else stale_time
        if not force:
            entry = self.cache.get(key)
            if self.cache.is_fresh(entry, stale_time):
                LOG.debug("fetch_query %s: fresh cache hit", key)
                return entry.data

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._run(key, fn, self._generations.get(key, 0)))
            self._inflight[key] = task
            task.add_done_callback(lambda done, key=key: self._forget(key, done))
        else:
            LOG.debug("fetch_query %s: joining in-flight request", key)
        return await asyncio.shield(task)

    def is_fetching(self, prefix: QueryKey = ()) -> bool:
        return any(matches(key, prefix) for key in self._inflight)

    def get_query_data(self, key: QueryKey) -> Any:
        return self.cache.get_data(tuple(key))

    def set_query_data(self, key: QueryKey, data: Any) -> None:
        """Replace the cached data of ``key``; callables receive the old data."""
        key = tuple(key)
        if callable(data):
            data = data(self.cache.get_data(key))
        self.cache.set(key, data)

    def invalidate_queries(self, prefix: QueryKey) -> int:
        return self.cache.invalidate(tuple(prefix))

    def cancel_queries(self, prefix: QueryKey) -> int:
        """
        Soft-cancel fetches whose key starts with ``prefix``.

        The requests keep running but their results are no longer written to
        the cache; callers awaiting them get the cached data instead.

        Returns:
            Number of fetches cancelled.
        """
        prefix = tuple(prefix)
        cancelled = 0
        for key in list(self._inflight):
            if matches(key, prefix):
                self._generations[key] = self._generations.get(key, 0) + 1
                cancelled += 1
        if cancelled:
            LOG.debug("cancel_queries %s: %d fetches", prefix, cancelled)
        return cancelled

    async def _run(self, key: tuple, fn: Fetcher, generation: int) -> Any:
        attempt = 0
        while True:
            try:
                data = await fn()
                break
            except ApiError as exc:
                if not exc.retryable or attempt >= self.retry:
                    raise
                delay = self.retry_delay * 2**attempt
                LOG.warning(
                    "fetch %s failed (%s), retrying in %.1fs", key, exc.message, delay
                )
                await self._sleep(delay)
                attempt += 1

        if self._generations.get(key, 0) != generation:
            LOG.debug("fetch %s was cancelled, keeping cached data", key)
            cached = self.cache.get_data(key)
            return cached if cached is not None else data
        self.cache.set(key, data)
        return data

    def _forget(self, key: tuple, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        if not task.cancelled():
            # Retrieve so an unawaited failure is not reported as lost
            task.exception()
