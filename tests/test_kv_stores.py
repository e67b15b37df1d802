import sqlite3
import types

import pytest

from iot_registry.errors import InvalidKeyError, StoreError
from iot_registry.kv import (
    InMemoryKVStore,
    KVStore,
    SQLiteKVStore,
    ScopedKVStore,
    ensure_store,
    in_range,
)
from iot_registry.kv import helpers, postgres_store


def _fill(store, keys):
    for k in keys:
        store.put(k, k.encode("utf-8"))


def test_get_missing_returns_none(kv_store):
    assert kv_store.get("absent") is None


def test_put_then_get(kv_store):
    kv_store.put("k", b"v")
    assert kv_store.get("k") == b"v"


def test_full_scan_is_ascending(kv_store):
    _fill(kv_store, ["b", "a", "é", "B", "aa"])
    keys = [k for k, _ in kv_store.range_scan("", "")]
    assert keys == ["B", "a", "aa", "b", "é"]


def test_scan_bounds_start_inclusive_end_exclusive(kv_store):
    _fill(kv_store, ["a", "b", "c", "d"])
    assert [k for k, _ in kv_store.range_scan("b", "d")] == ["b", "c"]
    assert [k for k, _ in kv_store.range_scan("c", "")] == ["c", "d"]
    assert [k for k, _ in kv_store.range_scan("", "b")] == ["a"]


def test_scan_returns_bytes(kv_store):
    kv_store.put("k", b"\x00\xffdata")
    assert list(kv_store.range_scan("", "")) == [("k", b"\x00\xffdata")]


@pytest.mark.parametrize("key", ["", None, 5])
def test_invalid_keys(kv_store, key):
    with pytest.raises(InvalidKeyError):
        kv_store.put(key, b"v")
    with pytest.raises(InvalidKeyError):
        kv_store.get(key)


def test_write_during_scan_is_allowed(kv_store):
    _fill(kv_store, ["a", "b"])
    seen = []
    for key, _ in kv_store.range_scan("", ""):
        seen.append(key)
        kv_store.put(key + "z", b"x")
    assert seen == ["a", "b"]


def test_stores_satisfy_protocol(tmp_path):
    assert isinstance(InMemoryKVStore(), KVStore)
    assert isinstance(SQLiteKVStore(tmp_path / "x.db"), KVStore)
    with pytest.raises(TypeError, match="range_scan"):
        ensure_store(object())


def test_in_range():
    assert in_range("b", "", "")
    assert in_range("b", "b", "c")
    assert not in_range("c", "b", "c")
    assert not in_range("a", "b", "")


def test_memory_store_clear():
    store = InMemoryKVStore()
    _fill(store, ["a", "b"])
    assert len(store) == 2 and "a" in store
    store.clear()
    assert list(store.range_scan("", "")) == []


def test_sqlite_store_persists_across_connections(tmp_path):
    path = tmp_path / "ledger.db"
    store = SQLiteKVStore(path)
    store.put("k", b"v")
    store.close()

    reopened = SQLiteKVStore(path)
    try:
        assert reopened.get("k") == b"v"
    finally:
        reopened.close()


def test_sqlite_store_bad_path(tmp_path):
    store = SQLiteKVStore(tmp_path / "missing" / "dir" / "x.db")
    with pytest.raises(StoreError):
        store.get("k")


# ----------------------------------------------------------------------
# Scoped store
# ----------------------------------------------------------------------

def test_scoped_stores_are_isolated(kv_store):
    hashes = ScopedKVStore(kv_store, "hash")
    assets = ScopedKVStore(kv_store, "asset")
    hashes.put("x", b"h")
    assets.put("x", b"a")
    kv_store.put("hashy", b"outside")

    assert hashes.get("x") == b"h"
    assert assets.get("x") == b"a"
    assert list(hashes.range_scan("", "")) == [("x", b"h")]
    assert list(assets.range_scan("", "")) == [("x", b"a")]
    assert kv_store.get("hash/x") == b"h"


def test_scoped_store_bounds(kv_store):
    scoped = ScopedKVStore(kv_store, "ns")
    _fill(scoped, ["a", "b", "c"])
    assert [k for k, _ in scoped.range_scan("b", "")] == ["b", "c"]
    assert [k for k, _ in scoped.range_scan("", "b")] == ["a"]


@pytest.mark.parametrize("namespace", ["", "a/b"])
def test_scoped_store_rejects_bad_namespace(namespace):
    with pytest.raises(ValueError):
        ScopedKVStore(InMemoryKVStore(), namespace)


def test_scoped_store_rejects_empty_key():
    with pytest.raises(InvalidKeyError):
        ScopedKVStore(InMemoryKVStore(), "ns").put("", b"v")


def test_memory_and_sqlite_stores_agree(tmp_path):
    mem = InMemoryKVStore()
    sql = SQLiteKVStore(tmp_path / "replica.db")
    for store in (mem, sql):
        _fill(store, ["z", "m", "a", "ü", "A"])
    try:
        assert list(mem.range_scan("", "")) == list(sql.range_scan("", ""))
    finally:
        sql.close()


# ----------------------------------------------------------------------
# Postgres store (driver replaced by a recording fake)
# ----------------------------------------------------------------------

class _FakeCursor:
    def __init__(self, conn):
        self.conn = conn

    def execute(self, query, params=()):
        if self.conn.aborted:
            raise RuntimeError("current transaction is aborted")
        if self.conn.fail_next:
            self.conn.fail_next = False
            self.conn.aborted = True
            raise RuntimeError("relation kv_state is locked")
        self.conn.executed.append((" ".join(query.split()), params))

    def fetchone(self):
        return self.conn.rows[0] if self.conn.rows else None

    def fetchall(self):
        return list(self.conn.rows)


class _FakeConnection:
    def __init__(self):
        self.executed = []
        self.rows = []
        self.commits = 0
        self.rollbacks = 0
        self.autocommit = True
        self.fail_next = False
        self.aborted = False
        self.closed = False

    def cursor(self):
        return _FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1
        self.aborted = False

    def close(self):
        self.closed = True


@pytest.fixture
def fake_psycopg2(monkeypatch):
    conn = _FakeConnection()
    fake = types.SimpleNamespace(connect=lambda dsn: conn, Binary=bytes)
    monkeypatch.setattr(postgres_store, "psycopg2", fake)
    return conn


def test_postgres_store_requires_driver(monkeypatch):
    monkeypatch.setattr(postgres_store, "psycopg2", None)
    with pytest.raises(StoreError, match="psycopg2"):
        postgres_store.PostgresKVStore("postgresql://x").get("k")


def test_postgres_store_creates_schema_and_puts(fake_psycopg2):
    store = postgres_store.PostgresKVStore("postgresql://x")
    store.put("k", b"v")

    queries = [q for q, _ in fake_psycopg2.executed]
    assert queries[0].startswith("CREATE TABLE IF NOT EXISTS kv_state")
    assert 'COLLATE "C"' in queries[0]
    assert queries[1].startswith("INSERT INTO kv_state")
    assert fake_psycopg2.executed[1][1] == ("k", b"v")
    assert fake_psycopg2.autocommit is False


def test_postgres_store_range_scan(fake_psycopg2):
    fake_psycopg2.rows = [("a", memoryview(b"1")), ("b", memoryview(b"2"))]
    store = postgres_store.PostgresKVStore("postgresql://x", init_schema=False)

    assert list(store.range_scan("a", "")) == [("a", b"1"), ("b", b"2")]
    query, params = fake_psycopg2.executed[-1]
    assert query == "SELECT key, value FROM kv_state WHERE key >= %s ORDER BY key ASC"
    assert params == ("a",)


def test_postgres_store_get(fake_psycopg2):
    fake_psycopg2.rows = [(memoryview(b"v"),)]
    store = postgres_store.PostgresKVStore("postgresql://x", init_schema=False)
    assert store.get("k") == b"v"


def test_postgres_store_recovers_after_failed_statement(fake_psycopg2):
    store = postgres_store.PostgresKVStore("postgresql://x", init_schema=False)
    fake_psycopg2.fail_next = True
    with pytest.raises(StoreError, match="locked"):
        store.get("k")
    assert fake_psycopg2.rollbacks == 1

    fake_psycopg2.rows = [(memoryview(b"v"),)]
    assert store.get("k") == b"v"
    store.put("k2", b"w")
    assert fake_psycopg2.executed[-1][1] == ("k2", b"w")


def test_postgres_store_closes_connection_when_schema_fails(fake_psycopg2):
    fake_psycopg2.fail_next = True
    store = postgres_store.PostgresKVStore("postgresql://x")
    with pytest.raises(StoreError):
        store.get("k")
    assert fake_psycopg2.closed
    assert store._conn is None


def test_sqlite_store_closes_connection_when_schema_fails(tmp_path, monkeypatch):
    opened = []
    real_connect = sqlite3.connect

    def connect(path):
        conn = real_connect(path)
        opened.append(conn)
        return conn

    def broken_schema(self, conn):
        raise StoreError("schema unavailable")

    monkeypatch.setattr(sqlite3, "connect", connect)
    monkeypatch.setattr(SQLiteKVStore, "init_schema", broken_schema)

    store = SQLiteKVStore(tmp_path / "broken.db")
    with pytest.raises(StoreError, match="schema unavailable"):
        store.get("k")
    assert store._conn is None
    with pytest.raises(sqlite3.ProgrammingError):
        opened[0].execute("SELECT 1")


def test_sqlite_store_failed_statement_leaves_store_usable(tmp_path):
    store = SQLiteKVStore(tmp_path / "state.db")
    try:
        with pytest.raises(StoreError):
            helpers.safe_execute(store.connect(), "SELECT * FROM missing_table")
        store.put("k", b"v")
        assert store.get("k") == b"v"
    finally:
        store.close()
