import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from src.app_shell.context import LedgerContext
from src.rules.loader import load_rules
from src.rules.models import Rules

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def rules() -> Rules:
    """The project's real rules.yaml."""
    rules_path = ROOT / "rules.yaml"
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules not found at {rules_path}")
    return load_rules(rules_path)


@pytest.fixture
def migrations_dir() -> Path:
    return ROOT / "migrations"


@pytest.fixture
def owner(rules: Rules) -> str:
    return rules.ledger.owner


@pytest.fixture
def custodian(rules: Rules) -> str:
    return rules.ledger.custodian


@pytest.fixture
def ledger(rules: Rules) -> LedgerContext:
    """In-memory ledger: dict store, dict settlement, block clock at 0."""
    return LedgerContext.create_in_memory(rules)


@pytest.fixture
def sqlite_ledger(tmp_path: Path, rules: Rules, migrations_dir: Path) -> Iterator[LedgerContext]:
    """
    Creates a full LedgerContext backed by a temporary SQLite DB.
    """
    db_path = os.path.join(tmp_path, "ledger.db")
    ctx = LedgerContext.create(db_path, rules, migrations_dir)
    yield ctx
    ctx.close()
