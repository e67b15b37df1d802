"""
Content-addressed registry of radio fingerprint and MAC address hashes.

Raw values never reach the store: only their SHA-256 digest is kept, and the
digest is both the record and its key. Registering the same raw value twice
fails; verifying a raw value recomputes its digest and checks for it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Union

from ..hashing import digest
from ..kv.base import KVStore
from ..models import HashRecord
from .record_store import RecordStore, ScanEntry
from .seeds import seed_hash_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    digest: str
    matched: bool

    @property
    def message(self) -> str:
        if self.matched:
            return f"Match {self.digest} found in the registry."
        return f"Match {self.digest} not found."


class HashRegistry:
    """
    Registry of HashRecords keyed by their own digest.
    """

    def __init__(self, store: KVStore):
        self.records = RecordStore(store)

    def initialize(self) -> List[HashRecord]:
        """Seed the digests of the genesis fingerprints and MAC addresses."""
        return self.records.initialize(seed_hash_records())

    def store_hash(self, raw: Union[str, bytes]) -> HashRecord:
        """
        Register the digest of a raw fingerprint or MAC address.

        Raises AlreadyExistsError if the digest is already registered.
        """
        h = digest(raw)
        record = self.records.create(
            h,
            HashRecord(hash=h),
            exists_message=(
                f"Hashed radio fingerprint or MAC address {h} already exists"
            ),
        )
        logger.info("Stored hash %s", h)
        return record

    def verify_result(self, raw: Union[str, bytes]) -> VerificationResult:
        h = digest(raw)
        return VerificationResult(digest=h, matched=self.records.exists(h))

    def verify(self, raw: Union[str, bytes]) -> str:
        """Recompute the digest of raw and report match / no match."""
        return self.verify_result(raw).message

    def exists(self, hash_value: str) -> bool:
        return self.records.exists(hash_value)

    def read(self, hash_value: str) -> HashRecord:
        return self.records.read(hash_value)

    def list_all(self) -> List[ScanEntry]:
        return self.records.list_all()


__all__ = [
    "HashRegistry",
    "VerificationResult",
]
