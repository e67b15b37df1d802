from __future__ import annotations

import pytest

from iot_registry.kv import InMemoryKVStore, SQLiteKVStore
from iot_registry.registry import AssetRegistry, HashRegistry, RecordStore


@pytest.fixture(autouse=True)
def _clean_registry_env(monkeypatch):
    for name in (
        "IOT_REGISTRY_STORE_BACKEND",
        "IOT_REGISTRY_STORE_URI",
        "IOT_REGISTRY_ENABLE_LOGGING",
        "IOT_REGISTRY_SEED_ON_START",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(params=["memory", "sqlite"])
def kv_store(request, tmp_path):
    if request.param == "memory":
        store = InMemoryKVStore()
    else:
        store = SQLiteKVStore(tmp_path / "state.db")
    yield store
    store.close()


@pytest.fixture
def record_store(kv_store):
    return RecordStore(kv_store)


@pytest.fixture
def hash_registry(kv_store):
    return HashRegistry(kv_store)


@pytest.fixture
def asset_registry(kv_store):
    return AssetRegistry(kv_store)
