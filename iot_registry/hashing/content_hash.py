"""
Content hashing utilities.

The goal:
    - compute a stable, deterministic hash for raw bytes or text
    - use it both as a record's identity and as its store key
    - never depend on the filesystem, clock, or process state

Text is hashed as its UTF-8 encoding. No salting, no randomness.
"""

from __future__ import annotations

import hashlib
import re
from typing import Union

DIGEST_ALGORITHM = "sha256"
DIGEST_HEX_LENGTH = 64

_SHA256_HEX = re.compile(r"[0-9a-f]{64}")


# ----------------------------------------------------------------------
# Internal primitives
# ----------------------------------------------------------------------

def _hash_bytes(data: bytes, algo: str = DIGEST_ALGORITHM) -> str:
    """
    Hash a bytes object with the given algorithm.
    """
    h = hashlib.new(algo)
    h.update(data)
    return h.hexdigest()


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def compute_content_hash(
    value: Union[str, bytes],
    algo: str = DIGEST_ALGORITHM,
) -> str:
    """
    Compute a deterministic hash for a string or raw bytes.

    Supported inputs:
        * bytes -> raw hashing
        * str   -> hashed as UTF-8 text

    Returns:
        lowercase hex digest string (algorithm: sha256 by default)

    Raises:
        TypeError for any other input type.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return _hash_bytes(bytes(value), algo=algo)

    if isinstance(value, str):
        return _hash_bytes(value.encode("utf-8"), algo=algo)

    raise TypeError(
        f"compute_content_hash: expected str or bytes, got {type(value).__name__}"
    )


def digest(value: Union[str, bytes]) -> str:
    """SHA-256 content address of value (64 lowercase hex characters)."""
    return compute_content_hash(value, algo=DIGEST_ALGORITHM)


def is_sha256_hex(value: object) -> bool:
    """True if value looks like a lowercase hex SHA-256 digest."""
    return isinstance(value, str) and _SHA256_HEX.fullmatch(value) is not None


__all__ = [
    "DIGEST_ALGORITHM",
    "DIGEST_HEX_LENGTH",
    "compute_content_hash",
    "digest",
    "is_sha256_hex",
]
