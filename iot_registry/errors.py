"""
Error hierarchy for the IoT registry.

Every failure raised by the registry core derives from RegistryError so
callers (CLI, hosting environment) can catch one type at the boundary.

    RegistryError
      ├── AlreadyExistsError   duplicate key on create
      ├── NotFoundError        read / attribute lookup miss
      ├── EncodingError        record cannot be encoded or decoded
      ├── InvalidKeyError      empty or non-string store key
      └── StoreError           underlying key-value store failure

Errors are terminal for the current operation. The core never retries.
"""

from __future__ import annotations

from typing import Any, Optional


class RegistryError(Exception):
    """Base class for all registry errors."""


class AlreadyExistsError(RegistryError):
    def __init__(self, key: str, message: Optional[str] = None):
        self.key = key
        super().__init__(message or f"Record {key} already exists")


class NotFoundError(RegistryError, LookupError):
    """
    Raised when a key or an attribute value resolves to no record.

    Exactly one of (key) or (attribute, value) is set.
    """

    def __init__(
        self,
        message: str,
        *,
        key: Optional[str] = None,
        attribute: Optional[str] = None,
        value: Any = None,
    ):
        self.key = key
        self.attribute = attribute
        self.value = value
        super().__init__(message)

    @classmethod
    def for_key(cls, key: str) -> "NotFoundError":
        return cls(f"Record {key} does not exist", key=key)

    @classmethod
    def for_attribute(cls, attribute: str, value: Any) -> "NotFoundError":
        return cls(
            f"No record with {attribute} {value!r} exists",
            attribute=attribute,
            value=value,
        )


class EncodingError(RegistryError, ValueError):
    """Raised when a value is not representable in canonical form."""


class InvalidKeyError(RegistryError, ValueError):
    """
    Raised for empty or non-string keys (the empty key is a scan boundary),
    and for a key that is not the record's own key.
    """


class StoreError(RegistryError):
    """Wraps a failure of the underlying key-value store."""


__all__ = [
    "RegistryError",
    "AlreadyExistsError",
    "NotFoundError",
    "EncodingError",
    "InvalidKeyError",
    "StoreError",
]
