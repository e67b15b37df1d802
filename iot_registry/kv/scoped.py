"""
Namespace scoping over a shared store.

ScopedKVStore lets several registries share one physical store without
seeing each other's keys, the way each contract on a ledger owns a private
keyspace. Keys are stored as "<namespace>/<key>"; scans are clamped to the
namespace and the prefix is stripped from returned keys.
"""

from __future__ import annotations

from typing import Iterator, Optional

from .base import KVStore, KeyValue, ensure_store, validate_key

SEPARATOR = "/"


class ScopedKVStore:
    def __init__(self, inner: KVStore, namespace: str):
        if not namespace or SEPARATOR in namespace:
            raise ValueError(
                f"namespace must be non-empty and must not contain {SEPARATOR!r}: "
                f"{namespace!r}"
            )
        self.inner = ensure_store(inner)
        self.namespace = namespace
        self._prefix = namespace + SEPARATOR
        # First string after every "<namespace>/..." key.
        self._upper = namespace + chr(ord(SEPARATOR) + 1)

    def _outer(self, key: str) -> str:
        return self._prefix + validate_key(key)

    def get(self, key: str) -> Optional[bytes]:
        return self.inner.get(self._outer(key))

    def put(self, key: str, value: bytes) -> None:
        self.inner.put(self._outer(key), value)

    def range_scan(self, start: str, end: str) -> Iterator[KeyValue]:
        lo = self._prefix + start if start else self._prefix
        hi = self._prefix + end if end else self._upper
        plen = len(self._prefix)
        for key, value in self.inner.range_scan(lo, hi):
            yield key[plen:], value

    def close(self) -> None:
        close = getattr(self.inner, "close", None)
        if close is not None:
            close()


__all__ = ["ScopedKVStore", "SEPARATOR"]
