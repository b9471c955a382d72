"""
Debouncing for search input.

Every push restarts the timer; only the value pushed last before a quiet
period of ``delay`` seconds is emitted.
"""

import asyncio
from typing import Any, Callable

from mixer_admin import config
from mixer_admin.lib import logs

LOG = logs.logger(__file__)


class Debouncer:
    """
    Emits the latest pushed value after ``delay`` seconds of quiet.

    Attributes:
        delay: Quiet period in seconds.
        value: Last emitted value.
    """

    def __init__(self, delay: float = config.SEARCH_DEBOUNCE_SECONDS, value: Any = None) -> None:
        self.delay = delay
        self.value = value
        self._handle: asyncio.TimerHandle | None = None
        self._pending: asyncio.Future | None = None
        self._listeners: list[Callable[[Any], None]] = []

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def subscribe(self, listener: Callable[[Any], None]) -> Callable[[], None]:
        """Call ``listener`` with every emitted value; returns an unsubscribe function."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def push(self, value: Any) -> "asyncio.Future[bool]":
        """
        Schedule ``value`` for emission, superseding any pending value.

        Returns:
            Future resolving to True when this value was emitted and False
            when a later push or cancel() superseded it.
        """
        loop = asyncio.get_running_loop()
        self.cancel()
        future = loop.create_future()
        self._pending = future
        self._handle = loop.call_later(self.delay, self._emit, value, future)
        return future

    def cancel(self) -> None:
        """Drop the pending value without emitting it."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._pending is not None and not self._pending.done():
            self._pending.set_result(False)
        self._pending = None

    def _emit(self, value: Any, future: asyncio.Future) -> None:
        self._handle = None
        self._pending = None
        self.value = value
        LOG.debug("debounced value: %r", value)
        for listener in list(self._listeners):
            listener(value)
        if not future.done():
            future.set_result(True)
