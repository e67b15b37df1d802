"""
Record model for the IoT registry.

The registry stores a closed set of record variants:

    HashRecord   content-addressed: key == hash, wire form {"hash": <hex>}
    AssetRecord  identity-addressed: key == id, wire form with camelCase
                 fields plus the "docType": "asset" discriminator

Records are immutable and carry no timestamps or generated ids, so that every
replica builds identical records from identical inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Mapping, Tuple, Union

from .errors import EncodingError


ASSET_DOC_TYPE = "asset"
DOC_TYPE_FIELD = "docType"

# wire name -> attribute name, in wire (sorted) order
ASSET_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("adresseMac", "adresse_mac"),
    ("empreinteRadio", "empreinte_radio"),
    ("id", "id"),
    ("idCloudProvider", "id_cloud_provider"),
    ("idFabricant", "id_fabricant"),
)


def _require_str(data: Mapping[str, Any], field: str, variant: str) -> str:
    if field not in data:
        raise EncodingError(f"{variant} is missing field {field!r}")
    value = data[field]
    if not isinstance(value, str):
        raise EncodingError(
            f"{variant} field {field!r} must be a string, got {type(value).__name__}"
        )
    return value


# ----------------------------------------------------------------------
# Hash record
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class HashRecord:
    hash: str

    variant: ClassVar[str] = "hash"

    @property
    def key(self) -> str:
        return self.hash

    def to_dict(self) -> Dict[str, Any]:
        return {"hash": self.hash}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HashRecord":
        return cls(hash=_require_str(data, "hash", "HashRecord"))


# ----------------------------------------------------------------------
# Asset record
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class AssetRecord:
    id: str
    id_cloud_provider: str
    empreinte_radio: str
    adresse_mac: str
    id_fabricant: str

    variant: ClassVar[str] = ASSET_DOC_TYPE

    @property
    def key(self) -> str:
        return self.id

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            wire: getattr(self, attr) for wire, attr in ASSET_FIELDS
        }
        out[DOC_TYPE_FIELD] = ASSET_DOC_TYPE
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AssetRecord":
        doc_type = data.get(DOC_TYPE_FIELD, ASSET_DOC_TYPE)
        if doc_type != ASSET_DOC_TYPE:
            raise EncodingError(f"AssetRecord has unexpected docType {doc_type!r}")
        values = {
            attr: _require_str(data, wire, "AssetRecord")
            for wire, attr in ASSET_FIELDS
        }
        return cls(**values)


Record = Union[HashRecord, AssetRecord]

RECORD_TYPES: Tuple[type, ...] = (HashRecord, AssetRecord)

_ASSET_WIRE_KEYS = frozenset(wire for wire, _ in ASSET_FIELDS)


# ----------------------------------------------------------------------
# Variant dispatch
# ----------------------------------------------------------------------

def record_from_dict(data: Mapping[str, Any]) -> Record:
    """
    Decode a wire mapping into its record variant.

    Asset records written without a docType (older writers omitted it on
    create) are still recognized by their exact field set.
    """
    if not isinstance(data, Mapping):
        raise EncodingError(f"record must be a mapping, got {type(data).__name__}")

    keys = set(data)
    if keys == {"hash"}:
        return HashRecord.from_dict(data)

    if DOC_TYPE_FIELD in data or keys == _ASSET_WIRE_KEYS:
        extra = keys - _ASSET_WIRE_KEYS - {DOC_TYPE_FIELD}
        if extra:
            raise EncodingError(f"AssetRecord has unexpected fields {sorted(extra)}")
        return AssetRecord.from_dict(data)

    raise EncodingError(f"unrecognized record shape with fields {sorted(keys)}")


def coerce_record(value: Union[Record, Mapping[str, Any]]) -> Record:
    """Return value as a record variant, decoding plain mappings."""
    if isinstance(value, RECORD_TYPES):
        return value
    return record_from_dict(value)


__all__ = [
    "ASSET_DOC_TYPE",
    "ASSET_FIELDS",
    "DOC_TYPE_FIELD",
    "HashRecord",
    "AssetRecord",
    "Record",
    "RECORD_TYPES",
    "record_from_dict",
    "coerce_record",
]
