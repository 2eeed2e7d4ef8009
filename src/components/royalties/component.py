"""
Royalty ledger component.

Per-creator accrued balances and their withdrawal.

Invariants:
- Balances are never negative
- A balance grows only through purchase accrual
- A balance drops only to zero, in the same call that pays it out in full
- The balance is zeroed before the payout transfer runs, so a reentrant
  call made during the payout sees nothing left to withdraw
"""

from __future__ import annotations

from src.domain.context import CallContext
from src.domain.entities import RoyaltyBalance, checked_add, require_uint
from src.domain.outcome import ErrorCode, LedgerFailure, Outcome
from src.rules.models import Rules

from .models import RoyaltyConfig, WithdrawalReceipt, WithdrawRoyaltiesInput
from .ports import PayoutPort, RoyaltyRepoPort


def get_royalty_balance(creator: str, *, repo: RoyaltyRepoPort) -> int:
    """Accrued balance for creator; 0 when no record exists."""
    record = repo.get_royalty(creator)
    return record.balance if record is not None else 0


def accrue(creator: str, amount: int, *, repo: RoyaltyRepoPort) -> RoyaltyBalance:
    """
    Add amount to creator's balance, creating the record on first accrual.

    Only called by purchase settlement. Never fails short of uint overflow.
    """
    require_uint(amount, "amount")
    record = repo.get_royalty(creator)
    if record is None:
        updated = RoyaltyBalance(creator=creator, balance=amount)
    else:
        updated = record.model_copy(update={"balance": checked_add(record.balance, amount)})
    repo.save_royalty(updated)
    return updated


def run_withdraw(
    ctx: CallContext,
    *,
    repo: RoyaltyRepoPort,
    payout: PayoutPort,
    config: RoyaltyConfig,
) -> Outcome[WithdrawalReceipt]:
    """
    Pay the caller's full accrued balance out of custody.

    The write to zero happens before the transfer. If the transfer fails the
    call returns the collaborator's failure and the host rolls the reset back.

    Args:
        ctx: Caller context; the caller is the creator
        repo: Royalty repository port
        payout: Value transfer port
        config: Royalty configuration (custodial account)

    Returns:
        Outcome with the WithdrawalReceipt
    """
    record = repo.get_royalty(ctx.caller)
    if record is None or record.balance == 0:
        return Outcome.fail(ErrorCode.INSUFFICIENT_BALANCE, "No royalties to withdraw")

    amount = record.balance
    repo.save_royalty(record.model_copy(update={"balance": 0}))

    result = payout.transfer(amount, config.custodian, ctx.caller)
    if not result.success:
        return Outcome.failed(LedgerFailure.from_settlement(result.code, result.reason))

    return Outcome.ok(WithdrawalReceipt(creator=ctx.caller, amount=amount))


def run(
    inp: WithdrawRoyaltiesInput,
    ctx: CallContext,
    *,
    repo: RoyaltyRepoPort,
    payout: PayoutPort,
    config: RoyaltyConfig,
) -> Outcome[WithdrawalReceipt]:
    """Main entry point for the royalty component."""
    if isinstance(inp, WithdrawRoyaltiesInput):
        return run_withdraw(ctx, repo=repo, payout=payout, config=config)
    raise TypeError(f"Unknown input type: {type(inp)}")


def load_config_from_rules(rules: Rules) -> RoyaltyConfig:
    return RoyaltyConfig(custodian=rules.ledger.custodian)
