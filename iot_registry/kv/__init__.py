"""
iot_registry.kv

Ordered key-value store layer for the IoT registry.

This package provides:

- The store contract consumed by the registry core:
      * KVStore
      * ensure_store
      * validate_key

- Concrete stores:
      * InMemoryKVStore (tests, ephemeral runs)
      * SQLiteKVStore   (local development + CLI)
      * PostgresKVStore (shared deployments, needs psycopg2)

- Adapters:
      * ScopedKVStore   (per-registry namespace inside a shared store)
"""

from .base import KVStore, KeyValue, ensure_store, in_range, validate_key
from .memory import InMemoryKVStore
from .sqlite_store import SQLiteKVStore
from .postgres_store import PostgresKVStore
from .scoped import ScopedKVStore

__all__ = [
    # Contract
    "KVStore",
    "KeyValue",
    "ensure_store",
    "in_range",
    "validate_key",

    # Stores
    "InMemoryKVStore",
    "SQLiteKVStore",
    "PostgresKVStore",

    # Adapters
    "ScopedKVStore",
]
