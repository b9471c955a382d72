"""
Shared on-disk key/value store backed by diskcache.

Reflex may run several worker processes; keeping query results in a
diskcache directory lets all of them read the same entries. Values are
pickled by diskcache, expire after a TTL and can be tagged with their
resource so one resource's entries are dropped in a single call.
"""

from pathlib import Path
from typing import Any, Iterator

import diskcache


class DiskCache:
    """
    Thin wrapper over ``diskcache.Cache``.

    Attributes:
        cache_dir: Directory holding the cache database.
    """

    def __init__(self, cache_dir: str | Path) -> None:
        self.cache_dir = Path(cache_dir)
        self._cache = diskcache.Cache(str(self.cache_dir))

    def get(self, key: str) -> Any:
        """Return the stored value, or None when absent or expired."""
        return self._cache.get(key, default=None)

    def set(self, key: str, value: Any, expire: float | None = None, tag: str | None = None) -> None:
        """
        Store ``value`` under ``key``.

        Args:
            key: Hashed key.
            value: Any picklable value.
            expire: Seconds until eviction; None keeps it until deleted.
            tag: Resource tag for ``evict``.
        """
        self._cache.set(key, value, expire=expire, tag=tag)

    def delete(self, key: str) -> None:
        self._cache.delete(key)

    def evict(self, tag: str) -> int:
        """Drop every value stored with ``tag``; returns how many went."""
        return self._cache.evict(tag)

    def values(self) -> Iterator[Any]:
        """Yield the live values; keys that expire mid-iteration are skipped."""
        for key in list(self._cache):
            value = self._cache.get(key, default=None)
            if value is not None:
                yield value

    def clear(self) -> None:
        self._cache.clear()

    def close(self) -> None:
        self._cache.close()
