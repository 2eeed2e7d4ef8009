"""
SQLite connection helpers shared by the ledger store and settlement adapters.

Both adapters run on one connection in autocommit mode and scope their
writes with SAVEPOINTs, so a ledger call and its transfers commit or roll
back together and can nest.
"""

from __future__ import annotations

import itertools
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

_savepoint_ids = itertools.count()


def dict_factory(cursor: sqlite3.Cursor, row: tuple[Any, ...]) -> dict[str, Any]:
    """Convert SQLite row to dictionary."""
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


def connect(db_path: str) -> sqlite3.Connection:
    """Open a connection with explicit transaction control."""
    conn = sqlite3.connect(db_path, isolation_level=None, check_same_thread=False)
    conn.row_factory = dict_factory
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


@contextmanager
def savepoint(conn: sqlite3.Connection, prefix: str) -> Iterator[None]:
    """Run the block inside a SAVEPOINT, rolling back to it on any exception."""
    name = f"{prefix}_{next(_savepoint_ids)}"
    conn.execute(f"SAVEPOINT {name}")
    try:
        yield
    except BaseException:
        conn.execute(f"ROLLBACK TO SAVEPOINT {name}")
        conn.execute(f"RELEASE SAVEPOINT {name}")
        raise
    else:
        conn.execute(f"RELEASE SAVEPOINT {name}")


# uint128 does not fit SQLite's 64-bit INTEGER; amounts travel as decimal text.


def to_db_uint(value: int) -> str:
    return str(value)


def from_db_uint(value: str | int) -> int:
    return int(value)
