"""
Identity-addressed registry of IoT assets.

Each asset is keyed by its caller-supplied id (serial number). Assets can
also be resolved by radio fingerprint or MAC address; those lookups scan the
whole registry (no secondary index) and return the first match in id order.
"""

from __future__ import annotations

import logging
from typing import Any, List

from ..errors import NotFoundError
from ..kv.base import KVStore
from ..models import AssetRecord
from .record_store import RecordStore, ScanEntry
from .seeds import seed_asset_records

logger = logging.getLogger(__name__)

EMPREINTE_FIELD = "empreinteRadio"
MAC_FIELD = "adresseMac"


class AssetRegistry:
    """
    Registry of AssetRecords keyed by id.
    """

    def __init__(self, store: KVStore):
        self.records = RecordStore(store)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def initialize(self) -> List[AssetRecord]:
        """Seed the genesis devices SN-1 and SN-2."""
        return self.records.initialize(seed_asset_records())

    def create_asset(
        self,
        id: str,
        id_cloud_provider: str,
        empreinte_radio: str,
        adresse_mac: str,
        id_fabricant: str,
    ) -> AssetRecord:
        """
        Register a new asset.

        Raises AlreadyExistsError if an asset with this id exists.
        """
        asset = AssetRecord(
            id=id,
            id_cloud_provider=id_cloud_provider,
            empreinte_radio=empreinte_radio,
            adresse_mac=adresse_mac,
            id_fabricant=id_fabricant,
        )
        self.records.create(
            id,
            asset,
            exists_message=f"IoT asset {id} already exists",
        )
        logger.info("Created asset %s", id)
        return asset

    # ------------------------------------------------------------------
    # Lookups by id
    # ------------------------------------------------------------------

    def exists(self, id: str) -> bool:
        return self.records.exists(id)

    def read(self, id: str) -> AssetRecord:
        if not self.exists(id):
            raise NotFoundError(f"IoT asset {id} does not exist", key=id)
        return self.records.read(id)

    def list_all(self) -> List[ScanEntry]:
        return self.records.list_all()

    # ------------------------------------------------------------------
    # Lookups by attribute (full scan)
    # ------------------------------------------------------------------

    def find_by_attribute(self, attribute: str, value: Any) -> AssetRecord:
        return self.records.find_by_attribute(attribute, value)

    def read_by_empreinte(self, empreinte_radio: str) -> AssetRecord:
        try:
            return self.find_by_attribute(EMPREINTE_FIELD, empreinte_radio)
        except NotFoundError:
            raise NotFoundError(
                f"IoT asset with radio fingerprint {empreinte_radio!r} does not exist",
                attribute=EMPREINTE_FIELD,
                value=empreinte_radio,
            ) from None

    def read_by_mac(self, adresse_mac: str) -> AssetRecord:
        try:
            return self.find_by_attribute(MAC_FIELD, adresse_mac)
        except NotFoundError:
            raise NotFoundError(
                f"IoT asset with MAC address {adresse_mac!r} does not exist",
                attribute=MAC_FIELD,
                value=adresse_mac,
            ) from None

    def exists_by_empreinte(self, empreinte_radio: str) -> bool:
        return self.records.exists_by_attribute(EMPREINTE_FIELD, empreinte_radio)

    def exists_by_mac(self, adresse_mac: str) -> bool:
        return self.records.exists_by_attribute(MAC_FIELD, adresse_mac)


__all__ = [
    "AssetRegistry",
    "EMPREINTE_FIELD",
    "MAC_FIELD",
]
