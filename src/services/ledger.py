"""
Ledger service: the atomic execution host.

Runs each public ledger operation as one all-or-nothing call. The service
builds the CallContext (caller + block height), opens a transaction on the
store and the settlement port, runs the component, and rolls everything back
when the component reports a failure or raises.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TypeVar

from src.components import access, ratings, registry, reports, royalties, subscriptions
from src.components.access import PurchaseAccessInput, PurchaseReceipt
from src.components.ratings import RateContentInput, RateContentOutput
from src.components.registry import (
    CreateContentInput,
    CreatePremiumContentInput,
    TransferOwnershipInput,
)
from src.components.reports import ReportContentInput
from src.components.royalties import WithdrawalReceipt
from src.components.subscriptions import ExtendSubscriptionInput, GrantSubscriptionInput
from src.core.ports.settlement import ValueTransferPort
from src.core.ports.store import LedgerStorePort
from src.core.ports.time import BlockClockPort
from src.domain.context import CallContext
from src.domain.entities import (
    ContentAvgRating,
    ContentItem,
    ContentRating,
    ContentReport,
    Subscription,
)
from src.domain.outcome import Outcome, TransactionAborted
from src.rules.models import Rules

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class LedgerConfig:
    """Deployment-time configuration for every component."""

    registry: registry.RegistryConfig
    royalties: royalties.RoyaltyConfig
    access: access.AccessConfig
    subscriptions: subscriptions.SubscriptionConfig
    ratings: ratings.RatingConfig
    reports: reports.ReportConfig

    @property
    def owner(self) -> str:
        return self.registry.owner

    @property
    def custodian(self) -> str:
        return self.access.custodian

    @classmethod
    def from_rules(cls, rules: Rules) -> LedgerConfig:
        return cls(
            registry=registry.load_config_from_rules(rules),
            royalties=royalties.load_config_from_rules(rules),
            access=access.load_config_from_rules(rules),
            subscriptions=subscriptions.load_config_from_rules(rules),
            ratings=ratings.load_config_from_rules(rules),
            reports=reports.load_config_from_rules(rules),
        )

    @classmethod
    def for_owner(cls, owner: str, custodian: str) -> LedgerConfig:
        """Default limits with the given identities (tests, dev)."""
        return cls(
            registry=registry.RegistryConfig(owner=owner),
            royalties=royalties.RoyaltyConfig(custodian=custodian),
            access=access.AccessConfig(custodian=custodian),
            subscriptions=subscriptions.SubscriptionConfig(owner=owner),
            ratings=ratings.RatingConfig(),
            reports=reports.ReportConfig(),
        )


class LedgerService:
    def __init__(
        self,
        config: LedgerConfig,
        store: LedgerStorePort,
        settlement: ValueTransferPort,
        clock: BlockClockPort,
    ):
        self.config = config
        self.store = store
        self.settlement = settlement
        self.clock = clock
        # Reentrant: a settlement hook may call back into the service on the same thread.
        self._lock = threading.RLock()

    # --- Host plumbing ---

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        """Hold the host lock so no ledger call runs while the block is active."""
        with self._lock:
            yield

    def _read(self, read: Callable[[], R]) -> R:
        with self._lock:
            return read()

    def block_height(self) -> int:
        return self._read(self.clock.current_height)

    def _context(self, caller: str) -> CallContext:
        return CallContext(caller=caller, block_height=self.clock.current_height())

    def _execute(self, operation: str, caller: str, call: Callable[[CallContext], Outcome[T]]) -> Outcome[T]:
        """
        Run one public call atomically.

        A failed Outcome is turned into TransactionAborted inside the scope so
        the store and settlement roll back; exceptions roll back and propagate.
        Calls are serialized: each one runs to commit or abort before the next
        starts.
        """
        with self._lock:
            ctx = self._context(caller)
            try:
                with self.store.transaction(), self.settlement.transaction():
                    outcome = call(ctx)
                    if outcome.failure is not None:
                        raise TransactionAborted(outcome.failure)
            except TransactionAborted as aborted:
                logger.info(
                    f"{operation} aborted: caller={caller}, height={ctx.block_height}, "
                    f"code={aborted.failure.code} ({aborted.failure.name})"
                )
                return Outcome.failed(aborted.failure)
            except (TypeError, ValueError) as e:
                logger.warning(f"{operation} rejected input: caller={caller}, error={e}")
                raise
            except Exception:
                logger.exception(f"{operation} failed fatally: caller={caller}")
                raise

            logger.info(f"{operation} committed: caller={caller}, height={ctx.block_height}")
            return outcome

    # --- Content Registry ---

    def create_content(
        self, caller: str, content_id: int, price: int, royalty_percentage: int
    ) -> Outcome[ContentItem]:
        inp = CreateContentInput(content_id, price, royalty_percentage)
        return self._execute(
            "create_content",
            caller,
            lambda ctx: registry.run_create_content(
                inp, ctx, repo=self.store, config=self.config.registry
            ),
        )

    def create_premium_content(
        self, caller: str, content_id: int, price: int, royalty_percentage: int
    ) -> Outcome[ContentItem]:
        inp = CreatePremiumContentInput(content_id, price, royalty_percentage)
        return self._execute(
            "create_premium_content",
            caller,
            lambda ctx: registry.run_create_premium_content(
                inp, ctx, repo=self.store, config=self.config.registry
            ),
        )

    def transfer_content_ownership(
        self, caller: str, content_id: int, new_owner: str
    ) -> Outcome[ContentItem]:
        inp = TransferOwnershipInput(content_id, new_owner)
        return self._execute(
            "transfer_content_ownership",
            caller,
            lambda ctx: registry.run_transfer_ownership(inp, ctx, repo=self.store),
        )

    def get_content_details(self, content_id: int) -> ContentItem | None:
        return self._read(lambda: registry.get_content_details(content_id, repo=self.store))

    # --- Access Control & Settlement ---

    def purchase_content_access(self, caller: str, content_id: int) -> Outcome[PurchaseReceipt]:
        inp = PurchaseAccessInput(content_id)
        return self._execute(
            "purchase_content_access",
            caller,
            lambda ctx: access.run_purchase(
                inp,
                ctx,
                content_repo=self.store,
                grant_repo=self.store,
                royalty_repo=self.store,
                payment=self.settlement,
                config=self.config.access,
            ),
        )

    def has_premium_access(self, content_id: int, user: str) -> bool:
        return self._read(lambda: access.has_premium_access(content_id, user, repo=self.store))

    # --- Royalty Ledger ---

    def get_royalty_balance(self, creator: str) -> int:
        return self._read(lambda: royalties.get_royalty_balance(creator, repo=self.store))

    def withdraw_royalties(self, caller: str) -> Outcome[WithdrawalReceipt]:
        return self._execute(
            "withdraw_royalties",
            caller,
            lambda ctx: royalties.run_withdraw(
                ctx, repo=self.store, payout=self.settlement, config=self.config.royalties
            ),
        )

    def get_custodial_balance(self) -> int:
        return self._read(lambda: self.settlement.balance_of(self.config.custodian))

    # --- Subscriptions ---

    def grant_subscription(
        self, caller: str, subscriber: str, creator: str, duration: int
    ) -> Outcome[Subscription]:
        inp = GrantSubscriptionInput(subscriber, creator, duration)
        return self._execute(
            "grant_subscription",
            caller,
            lambda ctx: subscriptions.run_grant(
                inp, ctx, repo=self.store, config=self.config.subscriptions
            ),
        )

    def extend_subscription(
        self, caller: str, subscriber: str, creator: str, duration: int
    ) -> Outcome[Subscription]:
        inp = ExtendSubscriptionInput(subscriber, creator, duration)
        return self._execute(
            "extend_subscription",
            caller,
            lambda ctx: subscriptions.run_extend(
                inp, ctx, repo=self.store, config=self.config.subscriptions
            ),
        )

    def get_subscription(self, subscriber: str) -> Subscription | None:
        return self._read(lambda: subscriptions.get_subscription(subscriber, repo=self.store))

    def is_subscription_active(self, subscriber: str, block_height: int | None = None) -> bool:
        with self._lock:
            height = self.clock.current_height() if block_height is None else block_height
            return subscriptions.is_subscription_active(subscriber, height, repo=self.store)

    # --- Ratings ---

    def rate_content(self, caller: str, content_id: int, rating: int) -> Outcome[RateContentOutput]:
        inp = RateContentInput(content_id, rating)
        return self._execute(
            "rate_content",
            caller,
            lambda ctx: ratings.run_rate(
                inp,
                ctx,
                content_repo=self.store,
                grant_repo=self.store,
                rating_repo=self.store,
                config=self.config.ratings,
            ),
        )

    def get_content_rating(self, content_id: int, user: str) -> ContentRating | None:
        return self._read(lambda: ratings.get_content_rating(content_id, user, repo=self.store))

    def get_average_rating(self, content_id: int) -> ContentAvgRating | None:
        return self._read(lambda: ratings.get_average_rating(content_id, repo=self.store))

    # --- Reports ---

    def report_content(self, caller: str, content_id: int, reason: str) -> Outcome[ContentReport]:
        inp = ReportContentInput(content_id, reason)
        return self._execute(
            "report_content",
            caller,
            lambda ctx: reports.run_report(
                inp,
                ctx,
                content_repo=self.store,
                report_repo=self.store,
                config=self.config.reports,
            ),
        )

    def get_report(self, content_id: int, reporter: str) -> ContentReport | None:
        return self._read(lambda: reports.get_report(content_id, reporter, repo=self.store))
