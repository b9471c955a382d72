"""
User-visible notifications raised by the API layer.

API calls report successes and failures to a ``Notifier``; the Reflex state
drains it after each event and turns the entries into toasts. Tests read the
collected entries directly.
"""

from dataclasses import dataclass
from enum import Enum

from mixer_admin.lib import logs

LOG = logs.logger(__file__)


class Level(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class Notification:
    """A single toast message."""

    level: Level
    message: str

    def to_dict(self) -> dict:
        return {"level": self.level.value, "message": self.message}


class Notifier:
    """Collects notifications until the UI drains them."""

    def __init__(self) -> None:
        self._pending: list[Notification] = []

    def notify(self, level: Level, message: str) -> None:
        """Queue a notification; an identical one still pending is not repeated."""
        notification = Notification(level, message)
        if notification in self._pending:
            LOG.debug("notify %s (collapsed): %s", level.value, message)
            return
        LOG.debug("notify %s: %s", level.value, message)
        self._pending.append(notification)

    def success(self, message: str) -> None:
        self.notify(Level.SUCCESS, message)

    def error(self, message: str) -> None:
        self.notify(Level.ERROR, message)

    def warning(self, message: str) -> None:
        self.notify(Level.WARNING, message)

    @property
    def pending(self) -> list[Notification]:
        """Notifications not yet drained, oldest first."""
        return list(self._pending)

    def drain(self) -> list[Notification]:
        """Return and forget every pending notification."""
        drained, self._pending = self._pending, []
        return drained
