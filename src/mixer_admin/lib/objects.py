"""
Stable hashing and JSON rendering of plain values.

Query keys are tuples of strings, numbers and None; ``hash`` turns them
into the fixed-length strings the disk cache is keyed by. ``to_json``
renders settings and records, including enums and dataclasses.
"""

import hashlib
import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any


class HashResult:
    """sha256 of a canonical JSON rendering."""

    def __init__(self, data: bytes) -> None:
        self._hash = hashlib.sha256(data)

    def hexdigest(self) -> str:
        return self._hash.hexdigest()


def _plain(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.value
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if hasattr(obj, "isoformat"):
        return obj.isoformat()
    return str(obj)


def hash(obj: Any) -> HashResult:
    """
    Hash ``obj`` independently of dict ordering and interpreter session.

    Tuples and lists hash alike, so a key read back from the cache hashes
    to the same value it was stored under.
    """
    canonical = json.dumps(obj, sort_keys=True, separators=(",", ":"), default=_plain)
    return HashResult(canonical.encode("utf-8"))


def to_json(obj: Any, indent: int | None = None) -> str:
    """Render ``obj`` as JSON; a top-level dataclass becomes a dict."""
    if is_dataclass(obj) and not isinstance(obj, type):
        obj = asdict(obj)
    return json.dumps(obj, default=_plain, indent=indent)
