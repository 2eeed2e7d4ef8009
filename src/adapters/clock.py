import sqlite3
from dataclasses import dataclass

from src.adapters.sqlite.db import from_db_uint, to_db_uint


@dataclass
class BlockClock:
    """Monotonic block-height counter standing in for the host chain."""

    height: int = 0

    def current_height(self) -> int:
        return self.height

    def advance(self, blocks: int = 1) -> int:
        if blocks < 0:
            raise ValueError("Block height cannot move backwards")
        self.height += blocks
        return self.height


class SQLiteBlockClock:
    """Block height persisted in the chain_state table of the ledger database."""

    def __init__(self, connection: sqlite3.Connection):
        self._conn = connection

    def current_height(self) -> int:
        row = self._conn.execute("SELECT height FROM chain_state WHERE id = 1").fetchone()
        return from_db_uint(row["height"]) if row else 0

    def advance(self, blocks: int = 1) -> int:
        if blocks < 0:
            raise ValueError("Block height cannot move backwards")
        height = self.current_height() + blocks
        self._conn.execute(
            "INSERT INTO chain_state (id, height) VALUES (1, ?) "
            "ON CONFLICT(id) DO UPDATE SET height=excluded.height",
            (to_db_uint(height),),
        )
        return height
