"""
Shared SQL helper utilities for the SQL-backed stores.

These wrappers ensure:
    - consistent interfaces across sqlite3 and psycopg2
    - driver errors surface as StoreError with the query attached
    - values come back as plain bytes regardless of driver buffer types
"""

from __future__ import annotations

from typing import Any, Optional

from ..errors import StoreError


# ----------------------------------------------------------------------
# Execution helpers
# ----------------------------------------------------------------------

def _rollback_quietly(conn: Any) -> Optional[Exception]:
    """
    Roll back the open transaction so the connection stays usable.
    Returns the rollback error, if any.
    """
    try:
        conn.rollback()
    except Exception as e:
        return e
    return None


def _failure(message: str, conn: Any) -> StoreError:
    rollback_error = _rollback_quietly(conn)
    if rollback_error is not None:
        message += f"; rollback also failed: {rollback_error}"
    return StoreError(message)


def safe_execute(conn: Any, query: str, params: Optional[tuple] = None):
    """
    Execute a single SQL statement.
    Returns the raw cursor.

    On failure the transaction is rolled back before raising, so a
    non-autocommit connection is not left in an aborted state.

    Raises
    ------
    StoreError
        Wrapped driver error with context.
    """
    cur = conn.cursor()
    try:
        cur.execute(query, params or ())
    except Exception as e:
        raise _failure(
            f"Store execute failed: {e} | Query: {query!r} | Params: {params!r}",
            conn,
        ) from e
    return cur


def safe_fetch_one(conn: Any, query: str, params: Optional[tuple] = None):
    """
    Execute a SELECT query and fetch one row (or None).
    """
    cur = safe_execute(conn, query, params)
    try:
        return cur.fetchone()
    except Exception as e:
        raise _failure(f"Store fetch failed: {e} | Query: {query!r}", conn) from e


def safe_fetch_all(conn: Any, query: str, params: Optional[tuple] = None) -> list:
    """
    Execute a SELECT query and fetch every row.
    """
    cur = safe_execute(conn, query, params)
    try:
        return cur.fetchall()
    except Exception as e:
        raise _failure(f"Store fetch failed: {e} | Query: {query!r}", conn) from e


def safe_commit(conn: Any) -> None:
    """
    Commit the current transaction, rolling back if the commit fails.
    """
    try:
        conn.commit()
    except Exception as e:
        raise _failure(f"Commit failed: {e}", conn) from e


def as_bytes(value: Any) -> bytes:
    """
    Normalize a BLOB/BYTEA column value to bytes.

    sqlite3 returns bytes; psycopg2 returns memoryview.
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise StoreError(f"Unexpected stored value type {type(value).__name__}")


__all__ = [
    "safe_execute",
    "safe_fetch_one",
    "safe_fetch_all",
    "safe_commit",
    "as_bytes",
]
