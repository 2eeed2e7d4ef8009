import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from src.app_shell.config import resolve_db_path, resolve_migrations_dir
from src.app_shell.context import LedgerContext
from src.rules.loader import load_rules
from src.rules.models import Rules
from src.services.ledger import LedgerService


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = self.base_dir / "rules.yaml"


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


# --- Ledger ---

# One SQLite connection per process; every request shares it.
_ledger_context_instance: LedgerContext | None = None


def get_ledger_context(
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> LedgerContext:
    """Get the ledger context singleton, opening the database on first use."""
    global _ledger_context_instance
    if _ledger_context_instance is None:
        _ledger_context_instance = LedgerContext.create(
            str(resolve_db_path(rules)),
            rules,
            resolve_migrations_dir(rules, settings.base_dir),
        )
    return _ledger_context_instance


def close_ledger_context() -> None:
    global _ledger_context_instance
    if _ledger_context_instance is not None:
        _ledger_context_instance.close()
        _ledger_context_instance = None


def get_ledger_service(ctx: LedgerContext = Depends(get_ledger_context)) -> LedgerService:
    return ctx.service


# --- Caller ---
def get_caller(x_caller: Annotated[str | None, Header()] = None) -> str:
    """
    Principal issuing the call, taken from the X-Caller header.

    The header is trusted as-is; signing and verification belong to the
    gateway in front of this API.
    """
    if x_caller is None or not x_caller.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-Caller header",
        )
    return x_caller.strip()
