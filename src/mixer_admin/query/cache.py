"""
Disk-backed store for query results.

Entries are kept in a DiskCache so every Reflex worker process shares them.
Each entry remembers when it was written and whether it has been
invalidated; the disk cache's TTL evicts entries ``cache_time`` seconds
after their last write.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from mixer_admin import config
from mixer_admin.lib import logs
from mixer_admin.lib.caches import DiskCache
from mixer_admin.query.keys import QueryKey, key_hash, matches

LOG = logs.logger(__file__)


@dataclass
class CachedQuery:
    """
    One cached query result.

    Attributes:
        key: The query key.
        data: Result data.
        updated_at: Wall-clock time of the last write.
        invalidated: True once the entry was marked stale explicitly.
    """

    key: tuple
    data: Any
    updated_at: float
    invalidated: bool = False

    def is_fresh(self, stale_time: float, now: float) -> bool:
        return not self.invalidated and now - self.updated_at < stale_time


class QueryCache:
    """
    Query results keyed by QueryKey.

    Attributes:
        cache_time: Seconds an entry survives after its last write.
    """

    def __init__(
        self,
        cache_dir: str | Path | None = None,
        cache_time: float = config.CACHE_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the cache.

        Args:
            cache_dir: Directory for the disk cache; defaults to
                       MIXER_ADMIN_CACHE_DIR or a temp directory.
            cache_time: Eviction TTL in seconds.
            clock: Time source, replaceable in tests.
        """
        self._disk = DiskCache(cache_dir or config.CACHE_DIR)
        self.cache_time = cache_time
        self.clock = clock

    def get(self, key: QueryKey) -> CachedQuery | None:
        return self._disk.get(key_hash(key))

    def get_data(self, key: QueryKey) -> Any:
        entry = self.get(key)
        return entry.data if entry is not None else None

    def set(self, key: QueryKey, data: Any) -> CachedQuery:
        """Write ``data`` under ``key`` as a fresh entry."""
        entry = CachedQuery(key=tuple(key), data=data, updated_at=self.clock())
        self._write(entry)
        return entry

    def is_fresh(self, entry: CachedQuery | None, stale_time: float) -> bool:
        return entry is not None and entry.is_fresh(stale_time, self.clock())

    def snapshot(self, key: QueryKey) -> CachedQuery | None:
        """Return an independent copy of the entry, for a later restore."""
        return self.get(key)

    def restore(self, key: QueryKey, snapshot: CachedQuery | None) -> None:
        """Put back exactly what ``snapshot`` captured, absence included."""
        if snapshot is None:
            self._disk.delete(key_hash(key))
        else:
            self._write(snapshot)

    def invalidate(self, prefix: QueryKey) -> int:
        """
        Mark every entry whose key starts with ``prefix`` as stale.

        Stale entries stay readable until refetched or evicted.

        Returns:
            Number of entries invalidated.
        """
        count = 0
        for entry in self._entries(prefix):
            if not entry.invalidated:
                entry.invalidated = True
                self._write(entry)
                count += 1
        LOG.debug("invalidate %s: %d entries", prefix, count)
        return count

    def remove(self, prefix: QueryKey) -> int:
        """Drop every entry whose key starts with ``prefix``."""
        if len(prefix) == 1:
            return self._disk.evict(str(prefix[0]))
        removed = 0
        for entry in self._entries(prefix):
            self._disk.delete(key_hash(entry.key))
            removed += 1
        return removed

    def keys(self, prefix: QueryKey = ()) -> list[tuple]:
        return [entry.key for entry in self._entries(prefix)]

    def clear(self) -> None:
        self._disk.clear()

    def close(self) -> None:
        self._disk.close()

    def _entries(self, prefix: QueryKey):
        for entry in self._disk.values():
            if isinstance(entry, CachedQuery) and matches(entry.key, prefix):
                yield entry

    def _write(self, entry: CachedQuery) -> None:
        self._disk.set(
            key_hash(entry.key),
            entry,
            expire=self.cache_time,
            tag=str(entry.key[0]) if entry.key else None,
        )
