"""
View-side state of a list query.

ListQuery tracks what one page currently shows: the data of the latest load
that succeeded, the error of the latest load that failed, and whether a load
is running. Each load is stamped with a sequence number; a load that
finishes after a newer one started is ignored by the view.
"""

from enum import Enum
from typing import Any

from mixer_admin.lib import logs
from mixer_admin.query.client import Fetcher, QueryClient
from mixer_admin.query.keys import QueryKey
from mixer_admin.services.errors import ApiError

LOG = logs.logger(__file__)


class QueryStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class ListQuery:
    """
    Observer of the list query behind one page.

    Previous data stays visible while a new key loads and after a failed
    load; only a view with nothing to show enters the error state.

    Attributes:
        key: Key of the latest load.
        data: Data currently shown.
        error: Error of the latest load, cleared on success.
        status: Lifecycle status.
        is_fetching: True while the latest load is running.
    """

    def __init__(self, client: QueryClient) -> None:
        self.client = client
        self.key: QueryKey | None = None
        self.data: Any = None
        self.error: ApiError | None = None
        self.status = QueryStatus.IDLE
        self.is_fetching = False
        self._seq = 0

    @property
    def is_loading(self) -> bool:
        """A load is running and there is nothing to show yet."""
        return self.is_fetching and self.data is None

    @property
    def is_refetching(self) -> bool:
        """A load is running behind data already on screen."""
        return self.is_fetching and self.data is not None

    @property
    def show_error(self) -> bool:
        return self.status is QueryStatus.ERROR and self.data is None

    def begin(self, key: QueryKey) -> int:
        """Start a load of ``key`` and return its sequence number."""
        self._seq += 1
        self.key = tuple(key)
        self.is_fetching = True
        cached = self.client.get_query_data(self.key)
        if cached is not None:
            self.data = cached
        if self.data is None:
            self.status = QueryStatus.LOADING
        return self._seq

    def resolve(self, seq: int, data: Any) -> bool:
        """Apply the result of load ``seq``; False when it was superseded."""
        if seq != self._seq:
            LOG.debug("discarding result of superseded load %d (latest %d)", seq, self._seq)
            return False
        self.data = data
        self.error = None
        self.status = QueryStatus.SUCCESS
        self.is_fetching = False
        return True

    def reject(self, seq: int, error: ApiError) -> bool:
        """Record the failure of load ``seq``; False when it was superseded."""
        if seq != self._seq:
            return False
        self.error = error
        self.status = QueryStatus.ERROR
        self.is_fetching = False
        return True

    async def load(self, key: QueryKey, fn: Fetcher, force: bool = False) -> bool:
        """
        Load ``key`` through the query client.

        Returns:
            True when the load succeeded and is what the view now shows.
        """
        seq = self.begin(key)
        try:
            data = await self.client.fetch_query(self.key, fn, force=force)
        except ApiError as exc:
            LOG.warning("load %s failed: %s", self.key, exc.message)
            self.reject(seq, exc)
            return False
        return self.resolve(seq, data)

    def sync(self) -> None:
        """Re-read the current key's cache entry (after an optimistic edit)."""
        if self.key is None:
            return
        cached = self.client.get_query_data(self.key)
        if cached is not None:
            self.data = cached

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "is_loading": self.is_loading,
            "is_refetching": self.is_refetching,
            "show_error": self.show_error,
            "error": self.error.message if self.error else "",
        }
