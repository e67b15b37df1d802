"""
Store-backed record registry.

RecordStore owns the mapping key -> canonical bytes on top of any KVStore.
It is the single place where records are written, so every write goes
through the same existence check and the same canonical encoding.

Operations:
    initialize(seeds)   write genesis records whose keys are still absent
    create(key, rec)    create-if-absent; duplicates raise AlreadyExistsError
    exists(key)         True iff non-empty bytes are stored at key
    read(key)           decoded record, or NotFoundError / EncodingError
    lookup(key)         tagged ReadResult, never raises for a miss
    list_all()          full ascending scan, undecodable values as raw bytes
    scan(predicate)     list_all() filtered over decoded records

The store is injected; RecordStore holds no other state.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from ..encoding import encode_envelope, decode_envelope
from ..errors import AlreadyExistsError, EncodingError, InvalidKeyError, NotFoundError
from ..kv.base import KVStore, ensure_store, validate_key
from ..models import Record, coerce_record, record_from_dict
from . import lookup

logger = logging.getLogger(__name__)


# A list_all() entry: a decoded record, or the raw bytes of a value that
# could not be decoded.
ScanEntry = Union[Record, bytes]


# ----------------------------------------------------------------------
# Tagged read result
# ----------------------------------------------------------------------

class ReadStatus(enum.Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    UNDECODABLE = "undecodable"


@dataclass(frozen=True)
class ReadResult:
    status: ReadStatus
    key: str
    record: Optional[Record] = None
    raw: Optional[bytes] = None
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status is ReadStatus.FOUND


# ----------------------------------------------------------------------
# Record store
# ----------------------------------------------------------------------

class RecordStore:
    """
    Registry core over an ordered key-value store.

    Parameters
    ----------
    store : KVStore
        Any object with get / put / range_scan.
    """

    def __init__(self, store: KVStore):
        self.store = ensure_store(store)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def initialize(self, seeds: Iterable[Record]) -> List[Record]:
        """
        Write each seed record under its own key.

        Seeds whose key is already present are left untouched, so running
        initialize twice does not fail and does not rewrite genesis state.
        Returns the seeds actually written.
        """
        written: List[Record] = []
        for seed in seeds:
            if self.exists(seed.key):
                logger.debug("Seed %s already present; skipping", seed.key)
                continue
            self.store.put(seed.key, encode_envelope(seed))
            written.append(seed)
        logger.info("Seeded %d record(s)", len(written))
        return written

    def create(
        self,
        key: str,
        record: Union[Record, Mapping[str, Any]],
        *,
        exists_message: Optional[str] = None,
    ) -> Record:
        """
        Create a record if key is absent.

        The existence check runs before the write, so a duplicate
        submission is rejected instead of overwriting the stored record.

        Raises
        ------
        InvalidKeyError
            key is empty, not a string, or not the record's own key.
        AlreadyExistsError
            key already holds a record.
        EncodingError
            record is not a valid record variant.
        """
        validate_key(key)

        # Instances are re-read through their wire form so field types are
        # checked the same way as for plain mappings and stored bytes.
        rec = record_from_dict(coerce_record(record).to_dict())
        if rec.key != key:
            raise InvalidKeyError(
                f"key {key!r} does not match the {rec.variant} record key {rec.key!r}"
            )

        if self.exists(key):
            raise AlreadyExistsError(key, exists_message)

        data = encode_envelope(rec)
        self.store.put(key, data)
        logger.debug("Created %s record %s (%d bytes)", rec.variant, key, len(data))
        return rec

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def exists(self, key: str) -> bool:
        value = self.store.get(key)
        return value is not None and len(value) > 0

    def lookup(self, key: str) -> ReadResult:
        """
        Read key and report the outcome as a tagged result.
        """
        raw = self.store.get(key)
        if not raw:
            return ReadResult(status=ReadStatus.NOT_FOUND, key=key)
        try:
            record = decode_envelope(raw)
        except EncodingError as e:
            return ReadResult(
                status=ReadStatus.UNDECODABLE,
                key=key,
                raw=raw,
                error=str(e),
            )
        return ReadResult(status=ReadStatus.FOUND, key=key, record=record)

    def read(self, key: str) -> Record:
        """
        Return the decoded record stored at key.

        Raises NotFoundError if absent and EncodingError if the stored bytes
        do not decode.
        """
        result = self.lookup(key)
        if result.status is ReadStatus.NOT_FOUND:
            raise NotFoundError.for_key(key)
        if result.status is ReadStatus.UNDECODABLE:
            raise EncodingError(f"Record {key} is not decodable: {result.error}")
        return result.record

    def list_all(self) -> List[ScanEntry]:
        """
        Scan the whole keyspace in ascending key order.

        A value that fails to decode is returned as its raw bytes and the
        scan continues.
        """
        out: List[ScanEntry] = []
        for key, raw in self.store.range_scan("", ""):
            try:
                out.append(decode_envelope(raw))
            except EncodingError as e:
                logger.warning("Undecodable value at key %s: %s", key, e)
                out.append(bytes(raw))
        return out

    def scan(self, predicate: Callable[[Record], bool]) -> List[Record]:
        """Decoded records matching predicate, in key order."""
        return [
            entry
            for entry in self.list_all()
            if not isinstance(entry, bytes) and predicate(entry)
        ]

    # ------------------------------------------------------------------
    # Attribute lookup
    # ------------------------------------------------------------------

    def find_by_attribute(self, attribute: str, value: Any) -> Record:
        """
        First record (in key order) whose field `attribute` equals value.
        """
        return lookup.find_by_attribute(self.list_all(), attribute, value)

    def exists_by_attribute(self, attribute: str, value: Any) -> bool:
        return lookup.exists_by_attribute(self.list_all(), attribute, value)


__all__ = [
    "ReadStatus",
    "ReadResult",
    "RecordStore",
    "ScanEntry",
]
