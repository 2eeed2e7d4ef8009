"""
Host services.

LedgerService runs each component entry point as one atomic call over the
store and settlement adapters.
"""

from src.services.ledger import LedgerConfig, LedgerService

__all__ = ["LedgerConfig", "LedgerService"]
