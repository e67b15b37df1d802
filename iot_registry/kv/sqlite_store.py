"""
SQLite store for the IoT registry.

Used for:
    - local development
    - tests
    - the CLI

One table holds every key/value pair. TEXT columns use SQLite's BINARY
collation, which compares the UTF-8 bytes with memcmp, so ORDER BY key gives
the same ascending order as the other stores.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Iterator, List, Optional, Union

from . import helpers
from ..errors import StoreError
from .base import KeyValue, validate_key

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Canonical Schema
# ----------------------------------------------------------------------

SQL_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_state (
    key     TEXT PRIMARY KEY NOT NULL,
    value   BLOB NOT NULL
);
"""


# ----------------------------------------------------------------------
# Store implementation
# ----------------------------------------------------------------------

class SQLiteKVStore:
    """
    SQLite implementation of the KVStore protocol.

    Parameters
    ----------
    db_path : str or Path
        Path to the SQLite database file, or ":memory:".

    A single connection is opened lazily and reused; close() releases it.
    Each put commits immediately.
    """

    def __init__(self, db_path: Union[str, Path]):
        self.path = str(db_path)
        self._conn: Optional[sqlite3.Connection] = None

    # ------------------------------------------------------------------
    # Connection handling
    # ------------------------------------------------------------------

    def connect(self) -> sqlite3.Connection:
        """
        Return the shared connection, opening it and creating the schema
        on first use.
        """
        if self._conn is None:
            try:
                conn = sqlite3.connect(self.path)
            except sqlite3.Error as e:
                raise StoreError(
                    f"Cannot open SQLite store {self.path!r}: {e}"
                ) from e
            try:
                self.init_schema(conn)
            except Exception:
                conn.close()
                raise
            self._conn = conn
            logger.debug("Opened SQLite store at %s", self.path)
        return self._conn

    def init_schema(self, conn: sqlite3.Connection) -> None:
        """
        Create the kv_state table if it does not exist.

        Idempotent, safe to call multiple times.
        """
        helpers.safe_execute(conn, SQL_SCHEMA)
        helpers.safe_commit(conn)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    # ------------------------------------------------------------------
    # Core interface
    # ------------------------------------------------------------------

    def get(self, key: str) -> Optional[bytes]:
        validate_key(key)
        row = helpers.safe_fetch_one(
            self.connect(),
            "SELECT value FROM kv_state WHERE key = ?",
            (key,),
        )
        return helpers.as_bytes(row[0]) if row else None

    def put(self, key: str, value: bytes) -> None:
        validate_key(key)
        conn = self.connect()
        helpers.safe_execute(
            conn,
            """
            INSERT INTO kv_state (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """,
            (key, sqlite3.Binary(bytes(value))),
        )
        helpers.safe_commit(conn)

    def range_scan(self, start: str, end: str) -> Iterator[KeyValue]:
        clauses: List[str] = []
        params: List[str] = []
        if start:
            clauses.append("key >= ?")
            params.append(start)
        if end:
            clauses.append("key < ?")
            params.append(end)

        query = "SELECT key, value FROM kv_state"
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY key ASC"

        # Materialize so callers may write while iterating.
        rows = helpers.safe_fetch_all(self.connect(), query, tuple(params))
        for key, value in rows:
            yield key, helpers.as_bytes(value)


__all__ = ["SQLiteKVStore", "SQL_SCHEMA"]
