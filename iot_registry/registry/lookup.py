"""
Attribute lookup over scanned records.

There is no secondary index: every lookup walks the full scan. Matching is
exact equality on the record's wire field (e.g. "adresseMac").

Ordering: the first match in scan order wins. Scan order is ascending key
order, so when several records share an attribute value the one with the
smallest key is returned. Duplicates are not an error.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Union

from ..errors import NotFoundError
from ..models import Record

_MISSING = object()


def _first_match(
    entries: Iterable[Union[Record, bytes]],
    attribute: str,
    value: Any,
) -> Optional[Record]:
    for entry in entries:
        # Raw bytes are values that failed to decode; they have no fields.
        if isinstance(entry, bytes):
            continue
        if entry.to_dict().get(attribute, _MISSING) == value:
            return entry
    return None


def find_by_attribute(
    entries: Iterable[Union[Record, bytes]],
    attribute: str,
    value: Any,
) -> Record:
    match = _first_match(entries, attribute, value)
    if match is None:
        raise NotFoundError.for_attribute(attribute, value)
    return match


def exists_by_attribute(
    entries: Iterable[Union[Record, bytes]],
    attribute: str,
    value: Any,
) -> bool:
    return _first_match(entries, attribute, value) is not None


__all__ = [
    "find_by_attribute",
    "exists_by_attribute",
]
