"""
Deterministic JSON canonicalization.

Rules:
    - mapping keys sorted at every nesting level
    - compact separators, no insignificant whitespace
    - UTF-8 output, non-ASCII characters preserved
    - no NaN/Infinity, no floats at all (their text form is not stable
      enough to hash across runtimes)
    - keys must be non-empty strings (the empty key is a scan boundary)

Two logically equal records always canonicalize to the same bytes,
whatever order their fields were supplied in.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Set

from ..errors import EncodingError
from ..models import RECORD_TYPES


def _normalize(value: Any, path: str, active: Set[int]) -> Any:
    """
    Validate value and rebuild it with sorted mappings.

    `active` holds the ids of the containers on the current path, so a
    container that contains itself is reported instead of recursing forever.
    """
    if isinstance(value, RECORD_TYPES):
        value = value.to_dict()

    if value is None or isinstance(value, (str, bool, int)):
        return value

    if isinstance(value, float):
        raise EncodingError(f"canonicalize: float values are not allowed at {path}")

    if isinstance(value, Mapping):
        marker = id(value)
        if marker in active:
            raise EncodingError(f"canonicalize: cyclic structure at {path}")
        active.add(marker)
        try:
            out = {}
            for key in value:
                if not isinstance(key, str):
                    raise EncodingError(
                        f"canonicalize: non-string key {key!r} at {path}"
                    )
                if key == "":
                    raise EncodingError(f"canonicalize: empty key at {path}")
            for key in sorted(value):
                out[key] = _normalize(value[key], f"{path}.{key}", active)
            return out
        finally:
            active.discard(marker)

    if isinstance(value, (list, tuple)):
        marker = id(value)
        if marker in active:
            raise EncodingError(f"canonicalize: cyclic structure at {path}")
        active.add(marker)
        try:
            return [
                _normalize(item, f"{path}[{i}]", active)
                for i, item in enumerate(value)
            ]
        finally:
            active.discard(marker)

    raise EncodingError(
        f"canonicalize: unsupported type {type(value).__name__} at {path}"
    )


def canonical_dumps(obj: Any) -> str:
    """Return the canonical JSON text for a record or mapping."""
    if not isinstance(obj, RECORD_TYPES) and not isinstance(obj, Mapping):
        raise EncodingError(
            f"canonicalize: expected a record or mapping, got {type(obj).__name__}"
        )
    normalized = _normalize(obj, "$", set())
    try:
        return json.dumps(
            normalized,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise EncodingError(f"canonicalize: non-serializable input: {e}") from e


def canonicalize(obj: Any) -> bytes:
    """
    Canonical byte form of a record or mapping.

    Raises EncodingError for cyclic structures, unsupported value types,
    non-string or empty keys, and text that is not valid Unicode.
    """
    text = canonical_dumps(obj)
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingError(f"canonicalize: text is not valid UTF-8: {e}") from e


def decode(data: bytes) -> dict:
    """
    Parse stored bytes back into a plain dict.

    Raises EncodingError for invalid UTF-8, invalid JSON, or a non-object
    top-level value.
    """
    try:
        obj = json.loads(bytes(data).decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise EncodingError(f"decode: malformed record bytes: {e}") from e
    if not isinstance(obj, dict):
        raise EncodingError(f"decode: expected a JSON object, got {type(obj).__name__}")
    return obj


__all__ = [
    "canonical_dumps",
    "canonicalize",
    "decode",
]
