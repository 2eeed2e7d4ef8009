"""
SQLite settlement adapter.

Keeps account balances in the ledger database. Sharing the store's
connection puts ledger writes and transfers in the same SAVEPOINT chain, so
an aborted call reverts both.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

from src.adapters.settlement import check_transfer
from src.adapters.sqlite.db import from_db_uint, savepoint, to_db_uint
from src.core.ports.settlement import TransferResult
from src.domain.entities import checked_add, require_uint

logger = logging.getLogger(__name__)


class SQLiteSettlement:
    def __init__(self, connection: sqlite3.Connection):
        self._conn = connection

    def balance_of(self, account: str) -> int:
        row = self._conn.execute(
            "SELECT balance FROM settlement_accounts WHERE account = ?", (account,)
        ).fetchone()
        return from_db_uint(row["balance"]) if row else 0

    def _set_balance(self, account: str, balance: int) -> None:
        self._conn.execute(
            """
            INSERT INTO settlement_accounts (account, balance) VALUES (?, ?)
            ON CONFLICT(account) DO UPDATE SET balance=excluded.balance
            """,
            (account, to_db_uint(balance)),
        )

    def transfer(self, amount: int, sender: str, recipient: str) -> TransferResult:
        failure = check_transfer(amount, sender, recipient, self.balance_of(sender))
        if failure is not None:
            logger.debug(f"SQLiteSettlement.transfer rejected: {failure.reason}")
            return failure

        with savepoint(self._conn, "settle"):
            self._set_balance(sender, self.balance_of(sender) - amount)
            self._set_balance(recipient, checked_add(self.balance_of(recipient), amount))
            self._conn.execute(
                "INSERT INTO settlement_transfers (amount, sender, recipient) VALUES (?, ?, ?)",
                (to_db_uint(amount), sender, recipient),
            )
        logger.debug(f"SQLiteSettlement.transfer: {amount} {sender} -> {recipient}")
        return TransferResult.ok()

    def mint(self, account: str, amount: int) -> int:
        """Credit account (dev funding); returns the new balance."""
        require_uint(amount, "amount")
        with savepoint(self._conn, "settle"):
            balance = checked_add(self.balance_of(account), amount)
            self._set_balance(account, balance)
        return balance

    def transfer_count(self) -> int:
        row = self._conn.execute("SELECT COUNT(*) AS n FROM settlement_transfers").fetchone()
        return int(row["n"]) if row else 0

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with savepoint(self._conn, "settle"):
            yield
