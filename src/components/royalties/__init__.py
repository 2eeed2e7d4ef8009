"""
Royalty ledger component.

Public API for royalty accrual and withdrawal.
"""

from .component import (
    accrue,
    get_royalty_balance,
    load_config_from_rules,
    run,
    run_withdraw,
)
from .models import RoyaltyConfig, WithdrawalReceipt, WithdrawRoyaltiesInput
from .ports import PayoutPort, RoyaltyRepoPort

__all__ = [
    "accrue",
    "get_royalty_balance",
    "load_config_from_rules",
    "run",
    "run_withdraw",
    "RoyaltyConfig",
    "WithdrawalReceipt",
    "WithdrawRoyaltiesInput",
    "PayoutPort",
    "RoyaltyRepoPort",
]
