"""
Ledger store port.

One authoritative store partitioned into seven logical tables, each addressed
by its composite key. There are no secondary indexes.

Implementations: InMemoryLedgerStore, SQLiteLedgerStore.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol

from src.domain.entities import (
    ContentAvgRating,
    ContentItem,
    ContentRating,
    ContentReport,
    PremiumAccessGrant,
    RoyaltyBalance,
    Subscription,
)


class LedgerStorePort(Protocol):
    """
    Full store interface used by the host runtime.

    Invariants:
    - Writes are upserts keyed by the record's composite key
    - Nothing is ever deleted
    - Writes inside transaction() are discarded if an exception escapes it
    """

    # --- Content ---

    def get_content(self, content_id: int) -> ContentItem | None: ...

    def save_content(self, item: ContentItem) -> None: ...

    # --- Royalties ---

    def get_royalty(self, creator: str) -> RoyaltyBalance | None: ...

    def save_royalty(self, balance: RoyaltyBalance) -> None: ...

    # --- Grants ---

    def get_grant(self, content_id: int, user: str) -> PremiumAccessGrant | None: ...

    def save_grant(self, grant: PremiumAccessGrant) -> None: ...

    # --- Subscriptions ---

    def get_subscription(self, subscriber: str) -> Subscription | None: ...

    def save_subscription(self, subscription: Subscription) -> None: ...

    # --- Ratings ---

    def get_rating(self, content_id: int, user: str) -> ContentRating | None: ...

    def save_rating(self, rating: ContentRating) -> None: ...

    def get_avg_rating(self, content_id: int) -> ContentAvgRating | None: ...

    def save_avg_rating(self, avg: ContentAvgRating) -> None: ...

    # --- Reports ---

    def get_report(self, content_id: int, reporter: str) -> ContentReport | None: ...

    def save_report(self, report: ContentReport) -> None: ...

    # --- Atomicity ---

    def transaction(self) -> AbstractContextManager[None]:
        """Open a (possibly nested) all-or-nothing scope."""
        ...
