"""
Unit tests for the royalty ledger component.
"""

from __future__ import annotations

import pytest

from src.components.royalties.component import (
    accrue,
    get_royalty_balance,
    run,
    run_withdraw,
)
from src.components.royalties.models import (
    RoyaltyConfig,
    WithdrawalReceipt,
    WithdrawRoyaltiesInput,
)
from src.core.ports.settlement import TransferErrorCode, TransferResult
from src.domain.context import CallContext
from src.domain.entities import UINT_MAX, ArithmeticOverflow, RoyaltyBalance
from src.domain.outcome import ErrorCode

CUSTODIAN = "SP_CUSTODY"
ALICE = "SP_ALICE"


# --- Test Fixtures ---


class FakeRoyaltyRepo:
    def __init__(self) -> None:
        self.balances: dict[str, RoyaltyBalance] = {}

    def get_royalty(self, creator: str) -> RoyaltyBalance | None:
        return self.balances.get(creator)

    def save_royalty(self, balance: RoyaltyBalance) -> None:
        self.balances[balance.creator] = balance


class FakePayout:
    """Records transfers; optionally fails or observes the repo mid-transfer."""

    def __init__(self, repo: FakeRoyaltyRepo, result: TransferResult | None = None) -> None:
        self.repo = repo
        self.result = result or TransferResult.ok()
        self.calls: list[tuple[int, str, str]] = []
        self.balance_seen_during_transfer: int | None = None

    def transfer(self, amount: int, sender: str, recipient: str) -> TransferResult:
        self.calls.append((amount, sender, recipient))
        self.balance_seen_during_transfer = get_royalty_balance(recipient, repo=self.repo)
        return self.result


@pytest.fixture
def repo() -> FakeRoyaltyRepo:
    return FakeRoyaltyRepo()


@pytest.fixture
def config() -> RoyaltyConfig:
    return RoyaltyConfig(custodian=CUSTODIAN)


# --- Accrual ---


class TestAccrue:
    def test_creates_record_on_first_accrual(self, repo: FakeRoyaltyRepo) -> None:
        accrue(ALICE, 100, repo=repo)
        assert get_royalty_balance(ALICE, repo=repo) == 100

    def test_adds_to_existing_balance(self, repo: FakeRoyaltyRepo) -> None:
        accrue(ALICE, 100, repo=repo)
        accrue(ALICE, 50, repo=repo)
        assert get_royalty_balance(ALICE, repo=repo) == 150

    def test_zero_accrual_creates_empty_record(self, repo: FakeRoyaltyRepo) -> None:
        accrue(ALICE, 0, repo=repo)
        assert repo.get_royalty(ALICE) == RoyaltyBalance(creator=ALICE, balance=0)

    def test_overflow_aborts(self, repo: FakeRoyaltyRepo) -> None:
        accrue(ALICE, UINT_MAX, repo=repo)
        with pytest.raises(ArithmeticOverflow):
            accrue(ALICE, 1, repo=repo)
        assert get_royalty_balance(ALICE, repo=repo) == UINT_MAX


def test_unknown_creator_reads_zero(repo: FakeRoyaltyRepo) -> None:
    assert get_royalty_balance("SP_NOBODY", repo=repo) == 0


# --- Withdrawal ---


class TestWithdraw:
    def test_pays_full_balance_and_zeroes_it(
        self, repo: FakeRoyaltyRepo, config: RoyaltyConfig
    ) -> None:
        accrue(ALICE, 250, repo=repo)
        payout = FakePayout(repo)

        outcome = run_withdraw(CallContext(ALICE), repo=repo, payout=payout, config=config)

        assert outcome.success
        assert outcome.value == WithdrawalReceipt(creator=ALICE, amount=250)
        assert payout.calls == [(250, CUSTODIAN, ALICE)]
        assert get_royalty_balance(ALICE, repo=repo) == 0

    def test_balance_zeroed_before_transfer(
        self, repo: FakeRoyaltyRepo, config: RoyaltyConfig
    ) -> None:
        accrue(ALICE, 250, repo=repo)
        payout = FakePayout(repo)

        run_withdraw(CallContext(ALICE), repo=repo, payout=payout, config=config)

        assert payout.balance_seen_during_transfer == 0

    def test_no_record_is_insufficient_balance(
        self, repo: FakeRoyaltyRepo, config: RoyaltyConfig
    ) -> None:
        payout = FakePayout(repo)

        outcome = run_withdraw(CallContext(ALICE), repo=repo, payout=payout, config=config)

        assert outcome.failure is not None
        assert outcome.failure.code == ErrorCode.INSUFFICIENT_BALANCE
        assert payout.calls == []

    def test_zero_balance_is_insufficient_balance(
        self, repo: FakeRoyaltyRepo, config: RoyaltyConfig
    ) -> None:
        accrue(ALICE, 0, repo=repo)

        outcome = run_withdraw(
            CallContext(ALICE), repo=repo, payout=FakePayout(repo), config=config
        )

        assert outcome.failure is not None
        assert outcome.failure.code == ErrorCode.INSUFFICIENT_BALANCE

    def test_failed_payout_surfaces_collaborator_code(
        self, repo: FakeRoyaltyRepo, config: RoyaltyConfig
    ) -> None:
        accrue(ALICE, 250, repo=repo)
        payout = FakePayout(
            repo, TransferResult.failed(TransferErrorCode.INSUFFICIENT_FUNDS, "custody empty")
        )

        outcome = run_withdraw(CallContext(ALICE), repo=repo, payout=payout, config=config)

        assert outcome.failure is not None
        assert outcome.failure.source == "settlement"
        assert outcome.failure.code == TransferErrorCode.INSUFFICIENT_FUNDS
        assert outcome.failure.message == "custody empty"

    def test_second_withdrawal_finds_nothing(
        self, repo: FakeRoyaltyRepo, config: RoyaltyConfig
    ) -> None:
        accrue(ALICE, 10, repo=repo)
        payout = FakePayout(repo)
        run_withdraw(CallContext(ALICE), repo=repo, payout=payout, config=config)

        outcome = run_withdraw(CallContext(ALICE), repo=repo, payout=payout, config=config)

        assert outcome.failure is not None
        assert outcome.failure.code == ErrorCode.INSUFFICIENT_BALANCE
        assert len(payout.calls) == 1


def test_run_dispatches_withdrawal(repo: FakeRoyaltyRepo, config: RoyaltyConfig) -> None:
    accrue(ALICE, 5, repo=repo)

    outcome = run(
        WithdrawRoyaltiesInput(),
        CallContext(ALICE),
        repo=repo,
        payout=FakePayout(repo),
        config=config,
    )

    assert outcome.success
    with pytest.raises(TypeError):
        run(object(), CallContext(ALICE), repo=repo, payout=FakePayout(repo), config=config)  # type: ignore[arg-type]
