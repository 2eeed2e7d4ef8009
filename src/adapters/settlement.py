"""
In-memory settlement adapter (dev/tests).

Dict-backed implementation of ValueTransferPort. Accounts are funded with
mint(); transfers follow the usual rules (positive amount, distinct parties,
sufficient funds).

An optional after_transfer hook runs once funds have moved, inside the
calling ledger operation. Tests use it to make reentrant calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from src.core.ports.settlement import (
    TransferErrorCode,
    TransferResult,
    ValueTransferPort,
)
from src.domain.entities import checked_add, require_uint

logger = logging.getLogger(__name__)

TransferHook = Callable[[int, str, str], None]


def check_transfer(amount: int, sender: str, recipient: str, sender_balance: int) -> TransferResult | None:
    """Shared transfer preconditions; None when the transfer may proceed."""
    if amount <= 0:
        return TransferResult.failed(
            TransferErrorCode.NON_POSITIVE_AMOUNT, f"Transfer amount must be positive: {amount}"
        )
    if sender == recipient:
        return TransferResult.failed(TransferErrorCode.SAME_PARTY, "Sender and recipient are the same")
    if sender_balance < amount:
        return TransferResult.failed(
            TransferErrorCode.INSUFFICIENT_FUNDS,
            f"{sender} holds {sender_balance}, needs {amount}",
        )
    return None


@dataclass
class InMemorySettlement:
    """
    In-memory accounts satisfying ValueTransferPort.

    Transfers made inside transaction() are reverted if the scope raises.
    """

    _balances: dict[str, int] = field(default_factory=dict)
    after_transfer: TransferHook | None = None
    transfers: list[tuple[int, str, str]] = field(default_factory=list)

    def transfer(self, amount: int, sender: str, recipient: str) -> TransferResult:
        failure = check_transfer(amount, sender, recipient, self.balance_of(sender))
        if failure is not None:
            logger.debug(
                f"InMemorySettlement.transfer rejected: amount={amount}, "
                f"sender={sender}, recipient={recipient}, reason={failure.reason}"
            )
            return failure

        self._balances[sender] = self.balance_of(sender) - amount
        self._balances[recipient] = checked_add(self.balance_of(recipient), amount)
        self.transfers.append((amount, sender, recipient))
        logger.debug(f"InMemorySettlement.transfer: {amount} {sender} -> {recipient}")

        if self.after_transfer is not None:
            self.after_transfer(amount, sender, recipient)
        return TransferResult.ok()

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        balances = dict(self._balances)
        transfer_count = len(self.transfers)
        try:
            yield
        except BaseException:
            self._balances = balances
            del self.transfers[transfer_count:]
            raise

    # --- Testing Helpers ---

    def mint(self, account: str, amount: int) -> int:
        """Credit account out of thin air (dev/test funding). Returns the new balance."""
        require_uint(amount, "amount")
        self._balances[account] = checked_add(self.balance_of(account), amount)
        return self._balances[account]


def _verify_protocol_compliance() -> None:
    adapter: ValueTransferPort = InMemorySettlement()
    _ = adapter.balance_of("SP_CHECK")


_verify_protocol_compliance()
