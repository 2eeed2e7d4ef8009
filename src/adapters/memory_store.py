"""
In-memory ledger store.

Dict-backed implementation of LedgerStorePort for tests and local runs.
Records are copied on the way in and out, so callers never hold a live
reference into a table.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from pydantic import BaseModel

from src.domain.entities import (
    ContentAvgRating,
    ContentItem,
    ContentRating,
    ContentReport,
    PremiumAccessGrant,
    RoyaltyBalance,
    Subscription,
)

M = TypeVar("M", bound=BaseModel)

TABLES = (
    "content",
    "subscriptions",
    "royalties",
    "grants",
    "ratings",
    "avg_ratings",
    "reports",
)


class InMemoryLedgerStore:
    def __init__(self) -> None:
        self._tables: dict[str, dict[Any, BaseModel]] = {name: {} for name in TABLES}

    # --- helpers ---

    def _get(self, table: str, key: Any, model: type[M]) -> M | None:
        row = self._tables[table].get(key)
        if row is None:
            return None
        if not isinstance(row, model):
            raise TypeError(f"{table} row {key!r} is {type(row).__name__}, expected {model.__name__}")
        return row.model_copy()

    def _put(self, table: str, key: Any, row: BaseModel) -> None:
        self._tables[table][key] = row.model_copy()

    def count(self, table: str) -> int:
        """Number of rows in a table (testing/audit helper)."""
        return len(self._tables[table])

    # --- Content ---

    def get_content(self, content_id: int) -> ContentItem | None:
        return self._get("content", content_id, ContentItem)

    def save_content(self, item: ContentItem) -> None:
        self._put("content", item.id, item)

    # --- Royalties ---

    def get_royalty(self, creator: str) -> RoyaltyBalance | None:
        return self._get("royalties", creator, RoyaltyBalance)

    def save_royalty(self, balance: RoyaltyBalance) -> None:
        self._put("royalties", balance.creator, balance)

    # --- Grants ---

    def get_grant(self, content_id: int, user: str) -> PremiumAccessGrant | None:
        return self._get("grants", (content_id, user), PremiumAccessGrant)

    def save_grant(self, grant: PremiumAccessGrant) -> None:
        self._put("grants", (grant.content_id, grant.user), grant)

    # --- Subscriptions ---

    def get_subscription(self, subscriber: str) -> Subscription | None:
        return self._get("subscriptions", subscriber, Subscription)

    def save_subscription(self, subscription: Subscription) -> None:
        self._put("subscriptions", subscription.subscriber, subscription)

    # --- Ratings ---

    def get_rating(self, content_id: int, user: str) -> ContentRating | None:
        return self._get("ratings", (content_id, user), ContentRating)

    def save_rating(self, rating: ContentRating) -> None:
        self._put("ratings", (rating.content_id, rating.user), rating)

    def get_avg_rating(self, content_id: int) -> ContentAvgRating | None:
        return self._get("avg_ratings", content_id, ContentAvgRating)

    def save_avg_rating(self, avg: ContentAvgRating) -> None:
        self._put("avg_ratings", avg.content_id, avg)

    # --- Reports ---

    def get_report(self, content_id: int, reporter: str) -> ContentReport | None:
        return self._get("reports", (content_id, reporter), ContentReport)

    def save_report(self, report: ContentReport) -> None:
        self._put("reports", (report.content_id, report.reporter), report)

    # --- Atomicity ---

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Snapshot every table; restore the snapshot if the scope raises."""
        # Rows are replaced, never mutated, so a shallow copy per table suffices.
        snapshot = {name: dict(rows) for name, rows in self._tables.items()}
        try:
            yield
        except BaseException:
            self._tables = snapshot
            raise
