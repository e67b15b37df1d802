"""
Ordered key-value store interface for the IoT registry.

This module defines the only contract the registry core needs from its
environment:

    store.get(key)               -> bytes | None
    store.put(key, value)        -> None   (raises StoreError on failure)
    store.range_scan(start, end) -> iterator of (key, value) pairs

range_scan yields pairs in ascending key order (UTF-8 byte order).
`start` is inclusive, `end` is exclusive, and an empty string for either
bound leaves that side open, so range_scan("", "") walks the whole keyspace.

This file provides:
- KVStore: structural protocol
- ensure_store: runtime validator
- validate_key: shared key check used by every adapter
"""

from __future__ import annotations

from typing import Any, Iterator, Optional, Tuple

from typing_extensions import Protocol, runtime_checkable

from ..errors import InvalidKeyError


KeyValue = Tuple[str, bytes]


# ---------------------------------------------------------------------------
# Structural Protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class KVStore(Protocol):
    """
    Structural protocol for objects usable as a registry store.

    Any store must satisfy:

        store.get(key)
        store.put(key, value)
        store.range_scan(start, end)

    Stores may also expose close(); the registry never calls it.
    """

    def get(self, key: str) -> Optional[bytes]:
        ...

    def put(self, key: str, value: bytes) -> None:
        ...

    def range_scan(self, start: str, end: str) -> Iterator[KeyValue]:
        ...


# ---------------------------------------------------------------------------
# Runtime Guards
# ---------------------------------------------------------------------------

def ensure_store(store: Any) -> KVStore:
    """
    Validate that an object behaves like a registry store.

    Raises:
        TypeError if required methods are missing.
    """
    if not isinstance(store, KVStore):
        missing = [
            name
            for name in ("get", "put", "range_scan")
            if not callable(getattr(store, name, None))
        ]
        raise TypeError(
            f"Invalid registry store {store!r}: missing methods {missing}"
        )
    return store


def validate_key(key: Any) -> str:
    """
    Check that key is usable as a store key.

    The empty string is reserved as the open range-scan boundary.
    """
    if not isinstance(key, str):
        raise InvalidKeyError(f"key must be a string, got {type(key).__name__}")
    if key == "":
        raise InvalidKeyError("key must not be empty")
    return key


def in_range(key: str, start: str, end: str) -> bool:
    """True if key lies in [start, end) with empty bounds left open."""
    if start and key < start:
        return False
    if end and key >= end:
        return False
    return True


__all__ = [
    "KeyValue",
    "KVStore",
    "ensure_store",
    "validate_key",
    "in_range",
]
