"""
iot_registry.hashing

Content address derivation for the registry.

This package provides:
- compute_content_hash: stable, deterministic hashing for raw bytes or strings.
- digest: the fixed SHA-256 variant used to key hash records.

Hashing is used to derive the identity and store key of content-addressed
records, and to verify whether a raw value has already been registered.
"""

from .content_hash import (
    DIGEST_ALGORITHM,
    DIGEST_HEX_LENGTH,
    compute_content_hash,
    digest,
    is_sha256_hex,
)

__all__ = [
    "DIGEST_ALGORITHM",
    "DIGEST_HEX_LENGTH",
    "compute_content_hash",
    "digest",
    "is_sha256_hex",
]
