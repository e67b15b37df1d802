"""
iot_registry

Top-level package initializer for the IoT registry.

Submodules include:
    - encoding/  canonical, schema-versioned record bytes
    - hashing/   SHA-256 content addresses
    - kv/        ordered key-value store contract and stores
    - registry/  record store, attribute lookup, hash and asset registries
    - core       RegistryService façade
    - cli        iot-registry command

This root package exports the configuration loader, the façade, the record
variants and the error types for convenience.
"""

from .config import RegistryConfig, load_config
from .core import RegistryService, create_registry_service
from .errors import (
    AlreadyExistsError,
    EncodingError,
    InvalidKeyError,
    NotFoundError,
    RegistryError,
    StoreError,
)
from .models import AssetRecord, HashRecord, Record

__all__ = [
    "RegistryConfig",
    "load_config",
    "RegistryService",
    "create_registry_service",
    "AssetRecord",
    "HashRecord",
    "Record",
    "RegistryError",
    "AlreadyExistsError",
    "NotFoundError",
    "EncodingError",
    "InvalidKeyError",
    "StoreError",
]
