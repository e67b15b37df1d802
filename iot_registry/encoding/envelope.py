"""
Versioned storage envelope.

Stored bytes are the canonical encoding of a record's wire mapping with one
extra field, "schemaVersion". Bytes written before the field existed carry
no version and are read as version 1. Any other version is refused so an
older replica never misreads a newer record shape.
"""

from __future__ import annotations

from typing import Any, Dict

from ..errors import EncodingError
from ..models import Record, record_from_dict
from .canonical import canonicalize, decode

SCHEMA_VERSION = 1
SCHEMA_VERSION_FIELD = "schemaVersion"

SUPPORTED_VERSIONS = frozenset({SCHEMA_VERSION})


def encode_envelope(record: Record) -> bytes:
    payload: Dict[str, Any] = record.to_dict()
    payload[SCHEMA_VERSION_FIELD] = SCHEMA_VERSION
    return canonicalize(payload)


def decode_envelope(data: bytes) -> Record:
    payload = decode(data)
    version = payload.pop(SCHEMA_VERSION_FIELD, SCHEMA_VERSION)
    if (
        not isinstance(version, int)
        or isinstance(version, bool)
        or version not in SUPPORTED_VERSIONS
    ):
        raise EncodingError(f"decode: unsupported schema version {version!r}")
    return record_from_dict(payload)


__all__ = [
    "SCHEMA_VERSION",
    "SCHEMA_VERSION_FIELD",
    "encode_envelope",
    "decode_envelope",
]
