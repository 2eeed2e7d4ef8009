"""
Royalty ledger component models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WithdrawRoyaltiesInput:
    """Withdrawal request. The caller is the creator being paid."""


@dataclass(frozen=True)
class WithdrawalReceipt:
    """Output of a settled withdrawal."""

    creator: str
    amount: int


@dataclass(frozen=True)
class RoyaltyConfig:
    """custodian funds every payout."""

    custodian: str
