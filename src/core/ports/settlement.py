"""
Settlement port interface.

External value-transfer facility used for purchase capture (buyer to the
custodial account) and royalty payout (custodial account to creator).

Implementations:
- InMemorySettlement: dict-backed accounts (dev/tests)
- SQLiteSettlement: accounts stored beside the ledger tables
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol

# --- Codes ---


class TransferErrorCode(IntEnum):
    """Failure codes reported by the bundled settlement adapters."""

    INSUFFICIENT_FUNDS = 1
    SAME_PARTY = 2
    NON_POSITIVE_AMOUNT = 3


# --- Models ---


@dataclass(frozen=True)
class TransferResult:
    """
    Result of a value transfer.

    Attributes:
        success: Whether the funds moved
        code: Collaborator failure code (None on success)
        reason: Human-readable failure reason
    """

    success: bool
    code: int | None = None
    reason: str | None = None

    @classmethod
    def ok(cls) -> TransferResult:
        return cls(success=True)

    @classmethod
    def failed(cls, code: TransferErrorCode, reason: str) -> TransferResult:
        return cls(success=False, code=int(code), reason=reason)


# --- Port Interface ---


class ValueTransferPort(Protocol):
    """
    Port for moving value between accounts.

    A failed transfer moves nothing. Transfers made inside transaction()
    are reverted when the enclosing ledger call aborts.
    """

    def transfer(self, amount: int, sender: str, recipient: str) -> TransferResult:
        """
        Move amount from sender to recipient.

        Args:
            amount: Smallest currency units
            sender: Paying account
            recipient: Receiving account

        Returns:
            TransferResult describing success or the failure reason
        """
        ...

    def balance_of(self, account: str) -> int:
        """Current balance of account (0 if unknown)."""
        ...

    def transaction(self) -> AbstractContextManager[None]:
        """Scope whose transfers are reverted if an exception escapes it."""
        ...
