"""
Path utilities for the Mixer Admin dashboard.

Provides the locations used for on-disk state such as the query cache.
"""

import tempfile
from pathlib import Path


def temp_dir() -> Path:
    """
    Return the system temporary directory as a Path.

    Returns:
        Path object pointing to the system temp directory.
    """
    return Path(tempfile.gettempdir())


def cache_dir(name: str, base: str | Path | None = None) -> Path:
    """
    Return a cache directory named ``name`` under ``base``.

    Args:
        name: Directory name for the cache.
        base: Parent directory; the system temp dir when omitted.

    Returns:
        Path to the (not necessarily existing) cache directory.
    """
    return Path(base) / name if base else temp_dir() / name
