from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from pathlib import Path

from src.adapters.clock import BlockClock, SQLiteBlockClock
from src.adapters.memory_store import InMemoryLedgerStore
from src.adapters.settlement import InMemorySettlement
from src.adapters.sqlite.db import connect
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteLedgerStore
from src.adapters.sqlite.settlement import SQLiteSettlement
from src.rules.models import Rules
from src.services.ledger import LedgerConfig, LedgerService

logger = logging.getLogger(__name__)


@dataclass
class LedgerContext:
    """Wired ledger service plus the adapters behind it."""

    service: LedgerService
    store: SQLiteLedgerStore | InMemoryLedgerStore
    settlement: SQLiteSettlement | InMemorySettlement
    clock: SQLiteBlockClock | BlockClock
    rules: Rules
    connection: sqlite3.Connection | None = field(default=None, repr=False)

    @classmethod
    def create(cls, db_path: str, rules: Rules, migrations_dir: str | Path) -> LedgerContext:
        """SQLite-backed context; pending migrations are applied first."""
        conn = connect(db_path)
        SQLiteMigrator(db_path, str(migrations_dir), connection=conn).run_migrations()

        store = SQLiteLedgerStore(db_path, connection=conn)
        settlement = SQLiteSettlement(conn)
        clock = SQLiteBlockClock(conn)
        service = LedgerService(LedgerConfig.from_rules(rules), store, settlement, clock)
        logger.info(f"Ledger opened at {db_path} (height {clock.current_height()})")

        return cls(
            service=service,
            store=store,
            settlement=settlement,
            clock=clock,
            rules=rules,
            connection=conn,
        )

    @classmethod
    def create_in_memory(cls, rules: Rules) -> LedgerContext:
        store = InMemoryLedgerStore()
        settlement = InMemorySettlement()
        clock = BlockClock()
        service = LedgerService(LedgerConfig.from_rules(rules), store, settlement, clock)
        return cls(service=service, store=store, settlement=settlement, clock=clock, rules=rules)

    def close(self) -> None:
        if self.connection is not None:
            self.connection.close()
