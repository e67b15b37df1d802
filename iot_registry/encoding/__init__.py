"""
iot_registry.encoding

Canonical serialization of registry records.

Submodules:
    - canonical: record/mapping -> deterministic bytes, and back to dicts
    - envelope:  schema-versioned storage form of a record
"""

from .canonical import canonical_dumps, canonicalize, decode
from .envelope import (
    SCHEMA_VERSION,
    SCHEMA_VERSION_FIELD,
    decode_envelope,
    encode_envelope,
)

__all__ = [
    "canonical_dumps",
    "canonicalize",
    "decode",
    "SCHEMA_VERSION",
    "SCHEMA_VERSION_FIELD",
    "encode_envelope",
    "decode_envelope",
]
