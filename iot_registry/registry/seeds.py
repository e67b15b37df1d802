"""
Genesis records written by Initialize().

Both registries seed the same two devices: the hash registry stores the
digests of their radio fingerprints and MAC addresses, the asset registry
stores the devices themselves.
"""

from __future__ import annotations

from typing import Tuple

from ..hashing import digest
from ..models import AssetRecord, HashRecord

SEED_ASSETS: Tuple[AssetRecord, ...] = (
    AssetRecord(
        id="SN-1",
        id_cloud_provider="cloud_provider_1",
        empreinte_radio="empreinte1",
        adresse_mac="00:0a:95:9d:68:16",
        id_fabricant="fabricant_1",
    ),
    AssetRecord(
        id="SN-2",
        id_cloud_provider="cloud_provider_2",
        empreinte_radio="empreinte2",
        adresse_mac="00:0a:95:9d:68:17",
        id_fabricant="fabricant_1",
    ),
)

SEED_HASH_INPUTS: Tuple[str, ...] = (
    "empreinte1",
    "00:0a:95:9d:68:16",
    "empreinte2",
    "00:0a:95:9d:68:17",
)


def seed_hash_records() -> Tuple[HashRecord, ...]:
    return tuple(HashRecord(hash=digest(raw)) for raw in SEED_HASH_INPUTS)


def seed_asset_records() -> Tuple[AssetRecord, ...]:
    return SEED_ASSETS


__all__ = [
    "SEED_ASSETS",
    "SEED_HASH_INPUTS",
    "seed_hash_records",
    "seed_asset_records",
]
