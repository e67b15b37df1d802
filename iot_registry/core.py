"""
Core façade for the IoT registry.

RegistryService is the single, high-level entrypoint used by:

    - the CLI,
    - a hosting environment that dispatches one request per call.

It wraps:

    - the backing key-value store (memory / SQLite / Postgres)
    - the hash registry   (namespace "hash")
    - the asset registry  (namespace "asset")

Design goals:
    - Deterministic behaviour: no clocks, no randomness, no global state
    - Minimal, explicit API
    - Easy to test (any KVStore can be injected)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .config import RegistryConfig, load_config
from .kv import (
    InMemoryKVStore,
    KVStore,
    PostgresKVStore,
    SQLiteKVStore,
    ScopedKVStore,
    ensure_store,
)
from .registry import AssetRegistry, HashRegistry

logger = logging.getLogger(__name__)

HASH_NAMESPACE = "hash"
ASSET_NAMESPACE = "asset"


# ---------------------------------------------------------------------------
# RegistryService façade
# ---------------------------------------------------------------------------

@dataclass
class RegistryService:
    """
    High-level façade over the registry stack.

    Attributes
    ----------
    config:
        RegistryConfig used to construct this instance.

    store:
        The shared backing store. Each registry sees only its own
        namespace of it.

    hashes:
        HashRegistry (content-addressed fingerprint / MAC digests).

    assets:
        AssetRegistry (IoT devices keyed by serial number).
    """

    config: RegistryConfig
    store: KVStore
    hashes: HashRegistry
    assets: AssetRegistry

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_store(
        cls,
        store: KVStore,
        config: Optional[RegistryConfig] = None,
    ) -> "RegistryService":
        """Wire both registries onto an existing store."""
        store = ensure_store(store)
        return cls(
            config=config or RegistryConfig(store_backend="memory"),
            store=store,
            hashes=HashRegistry(ScopedKVStore(store, HASH_NAMESPACE)),
            assets=AssetRegistry(ScopedKVStore(store, ASSET_NAMESPACE)),
        )

    @classmethod
    def from_config(
        cls,
        config: Optional[RegistryConfig] = None,
    ) -> "RegistryService":
        """
        Construct a RegistryService from a RegistryConfig.

        This:
            - selects the store backend (memory/sqlite/postgres),
            - wires up both registries,
            - optionally seeds the genesis records.
        """
        cfg = config or load_config()

        if cfg.enable_logging:
            logging.basicConfig(level=logging.INFO)
            logger.info("Initializing RegistryService with config: %s", cfg)

        service = cls.from_store(_create_store_from_config(cfg), cfg)
        if cfg.seed_on_start:
            service.initialize()
        return service

    @classmethod
    def from_env(cls) -> "RegistryService":
        """Construct RegistryService using environment variables."""
        return cls.from_config(load_config())

    def close(self) -> None:
        close = getattr(self.store, "close", None)
        if close is not None:
            close()

    # ------------------------------------------------------------------
    # Genesis
    # ------------------------------------------------------------------

    def initialize(self) -> Dict[str, List[Any]]:
        """
        Seed both registries. Seeds already present are skipped.
        """
        return {
            HASH_NAMESPACE: self.hashes.initialize(),
            ASSET_NAMESPACE: self.assets.initialize(),
        }


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _create_store_from_config(config: RegistryConfig) -> KVStore:
    """
    Instantiate the appropriate store for a given configuration.
    """
    name = (config.store_backend or "").lower()

    if name == "memory":
        return InMemoryKVStore()

    if name == "sqlite":
        return SQLiteKVStore(config.store_uri)

    if name in ("postgres", "postgresql", "psql"):
        return PostgresKVStore(config.store_uri)

    raise ValueError(f"Unsupported registry store backend: {config.store_backend!r}")


# ---------------------------------------------------------------------------
# Convenience
# ---------------------------------------------------------------------------

def create_registry_service(
    config: Optional[RegistryConfig] = None,
) -> RegistryService:
    """
    Convenience constructor used by services / scripts.
    """
    return RegistryService.from_config(config)


__all__ = [
    "ASSET_NAMESPACE",
    "HASH_NAMESPACE",
    "RegistryService",
    "create_registry_service",
]
