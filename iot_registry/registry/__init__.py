"""
IoT registry - Registry package.

This package provides:
    - RecordStore: create-if-absent / exists / read / list-all over a KVStore
    - Attribute lookup by full scan (find_by_attribute, exists_by_attribute)
    - Domain registries:
          * HashRegistry  (content-addressed fingerprint / MAC digests)
          * AssetRegistry (identity-addressed IoT devices)
    - Genesis seed records

Registries never update or delete: a key goes from absent to present once.
"""

from .record_store import ReadResult, ReadStatus, RecordStore, ScanEntry
from .lookup import exists_by_attribute, find_by_attribute
from .hash_registry import HashRegistry, VerificationResult
from .asset_registry import AssetRegistry, EMPREINTE_FIELD, MAC_FIELD
from .seeds import (
    SEED_ASSETS,
    SEED_HASH_INPUTS,
    seed_asset_records,
    seed_hash_records,
)

__all__ = [
    # Core store
    "RecordStore",
    "ReadResult",
    "ReadStatus",
    "ScanEntry",

    # Lookup
    "find_by_attribute",
    "exists_by_attribute",

    # Domain registries
    "HashRegistry",
    "VerificationResult",
    "AssetRegistry",
    "EMPREINTE_FIELD",
    "MAC_FIELD",

    # Seeds
    "SEED_ASSETS",
    "SEED_HASH_INPUTS",
    "seed_asset_records",
    "seed_hash_records",
]
