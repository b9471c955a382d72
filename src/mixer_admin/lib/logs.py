"""
Logging setup for the Mixer Admin dashboard.

Every module asks for ``logs.logger(__file__)``. Loggers are children of a
single ``mixer_admin`` logger that owns the stream handler, so the level set
through LOG_LEVEL applies to the API client, the query layer and the Reflex
state alike.
"""

import logging
import os
from pathlib import Path

_ROOT = "mixer_admin"

_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def _root() -> logging.Logger:
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        level = getattr(logging, _LOG_LEVEL, logging.INFO)
        root.setLevel(level)
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root.addHandler(handler)
        root.propagate = False
        # httpx logs every request at INFO; we log our own at DEBUG
        if level > logging.DEBUG:
            logging.getLogger("httpx").setLevel(logging.WARNING)
    return root


def logger(name: str) -> logging.Logger:
    """
    Return the logger for a module.

    Args:
        name: Logger name or a ``__file__`` path, which becomes
              ``mixer_admin.<package>.<module>``.

    Returns:
        A child of the configured ``mixer_admin`` logger.
    """
    root = _root()
    if "/" in name or "\\" in name:
        path = Path(name)
        parent = path.parent.name
        name = path.stem if parent in ("", _ROOT) else f"{parent}.{path.stem}"
    if name == _ROOT or name.startswith(_ROOT + "."):
        return logging.getLogger(name)
    return root.getChild(name)
