"""
In-memory ordered key-value store.

Keys are kept in a sorted list next to the value dict so range scans walk
them in ascending order without re-sorting. Python compares str by code
point, which matches UTF-8 byte order, so scan order is the same as the
SQLite and Postgres adapters.

Used for:
    - tests
    - the "memory" backend of RegistryService
"""

from __future__ import annotations

from bisect import bisect_left, insort
from typing import Dict, Iterator, List, Optional

from .base import KeyValue, in_range, validate_key


class InMemoryKVStore:
    """
    Dict-backed store implementing the KVStore protocol.

    Values are copied on the way in and out, so callers never hold a
    reference into the store.
    """

    def __init__(self) -> None:
        self._data: Dict[str, bytes] = {}
        self._keys: List[str] = []

    # ------------------------------------------------------------------
    # Core interface
    # ------------------------------------------------------------------

    def get(self, key: str) -> Optional[bytes]:
        validate_key(key)
        return self._data.get(key)

    def put(self, key: str, value: bytes) -> None:
        validate_key(key)
        if key not in self._data:
            insort(self._keys, key)
        self._data[key] = bytes(value)

    def range_scan(self, start: str, end: str) -> Iterator[KeyValue]:
        pos = bisect_left(self._keys, start) if start else 0
        # Snapshot so a put during iteration does not shift positions.
        for key in self._keys[pos:]:
            if not in_range(key, start, end):
                break
            yield key, self._data[key]

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------

    def clear(self) -> None:
        self._data.clear()
        self._keys.clear()

    def close(self) -> None:
        return None

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._data


__all__ = ["InMemoryKVStore"]
