"""
SQLite ledger store (LedgerStorePort implementation).

All seven ledger tables live in one database and are written through one
connection. transaction() maps onto a SAVEPOINT, so scopes nest.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from src.adapters.sqlite.db import connect, from_db_uint, savepoint, to_db_uint
from src.domain.entities import (
    ContentAvgRating,
    ContentItem,
    ContentRating,
    ContentReport,
    PremiumAccessGrant,
    RoyaltyBalance,
    Subscription,
)


class SQLiteLedgerStore:
    def __init__(self, db_path: str, connection: sqlite3.Connection | None = None):
        self.db_path = db_path
        self._conn = connection if connection is not None else connect(db_path)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    def close(self) -> None:
        self._conn.close()

    def _one(self, query: str, params: tuple[Any, ...]) -> dict[str, Any] | None:
        row: dict[str, Any] | None = self._conn.execute(query, params).fetchone()
        return row

    # --- Content ---

    def get_content(self, content_id: int) -> ContentItem | None:
        row = self._one("SELECT * FROM content_items WHERE id = ?", (to_db_uint(content_id),))
        if not row:
            return None
        return ContentItem(
            id=from_db_uint(row["id"]),
            creator=row["creator"],
            price=from_db_uint(row["price"]),
            royalty_percentage=row["royalty_percentage"],
        )

    def save_content(self, item: ContentItem) -> None:
        self._conn.execute(
            """
            INSERT INTO content_items (id, creator, price, royalty_percentage)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                creator=excluded.creator,
                price=excluded.price,
                royalty_percentage=excluded.royalty_percentage
            """,
            (to_db_uint(item.id), item.creator, to_db_uint(item.price), item.royalty_percentage),
        )

    # --- Royalties ---

    def get_royalty(self, creator: str) -> RoyaltyBalance | None:
        row = self._one("SELECT * FROM royalty_balances WHERE creator = ?", (creator,))
        if not row:
            return None
        return RoyaltyBalance(creator=row["creator"], balance=from_db_uint(row["balance"]))

    def save_royalty(self, balance: RoyaltyBalance) -> None:
        self._conn.execute(
            """
            INSERT INTO royalty_balances (creator, balance) VALUES (?, ?)
            ON CONFLICT(creator) DO UPDATE SET balance=excluded.balance
            """,
            (balance.creator, to_db_uint(balance.balance)),
        )

    # --- Grants ---

    def get_grant(self, content_id: int, user: str) -> PremiumAccessGrant | None:
        row = self._one(
            "SELECT * FROM premium_access WHERE content_id = ? AND user = ?",
            (to_db_uint(content_id), user),
        )
        if not row:
            return None
        return PremiumAccessGrant(
            content_id=from_db_uint(row["content_id"]),
            user=row["user"],
            access=bool(row["access"]),
        )

    def save_grant(self, grant: PremiumAccessGrant) -> None:
        self._conn.execute(
            """
            INSERT INTO premium_access (content_id, user, access) VALUES (?, ?, ?)
            ON CONFLICT(content_id, user) DO UPDATE SET access=excluded.access
            """,
            (to_db_uint(grant.content_id), grant.user, int(grant.access)),
        )

    # --- Subscriptions ---

    def get_subscription(self, subscriber: str) -> Subscription | None:
        row = self._one("SELECT * FROM subscriptions WHERE subscriber = ?", (subscriber,))
        if not row:
            return None
        return Subscription(
            subscriber=row["subscriber"],
            creator=row["creator"],
            expiry=from_db_uint(row["expiry"]),
        )

    def save_subscription(self, subscription: Subscription) -> None:
        self._conn.execute(
            """
            INSERT INTO subscriptions (subscriber, creator, expiry) VALUES (?, ?, ?)
            ON CONFLICT(subscriber) DO UPDATE SET
                creator=excluded.creator,
                expiry=excluded.expiry
            """,
            (subscription.subscriber, subscription.creator, to_db_uint(subscription.expiry)),
        )

    # --- Ratings ---

    def get_rating(self, content_id: int, user: str) -> ContentRating | None:
        row = self._one(
            "SELECT * FROM content_ratings WHERE content_id = ? AND user = ?",
            (to_db_uint(content_id), user),
        )
        if not row:
            return None
        return ContentRating(
            content_id=from_db_uint(row["content_id"]),
            user=row["user"],
            rating=row["rating"],
            timestamp=from_db_uint(row["timestamp"]),
        )

    def save_rating(self, rating: ContentRating) -> None:
        self._conn.execute(
            """
            INSERT INTO content_ratings (content_id, user, rating, timestamp)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(content_id, user) DO UPDATE SET
                rating=excluded.rating,
                timestamp=excluded.timestamp
            """,
            (to_db_uint(rating.content_id), rating.user, rating.rating, to_db_uint(rating.timestamp)),
        )

    def get_avg_rating(self, content_id: int) -> ContentAvgRating | None:
        row = self._one(
            "SELECT * FROM content_avg_ratings WHERE content_id = ?", (to_db_uint(content_id),)
        )
        if not row:
            return None
        return ContentAvgRating(
            content_id=from_db_uint(row["content_id"]),
            total_rating=from_db_uint(row["total_rating"]),
            count=from_db_uint(row["count"]),
            avg_rating=from_db_uint(row["avg_rating"]),
        )

    def save_avg_rating(self, avg: ContentAvgRating) -> None:
        self._conn.execute(
            """
            INSERT INTO content_avg_ratings (content_id, total_rating, count, avg_rating)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(content_id) DO UPDATE SET
                total_rating=excluded.total_rating,
                count=excluded.count,
                avg_rating=excluded.avg_rating
            """,
            (
                to_db_uint(avg.content_id),
                to_db_uint(avg.total_rating),
                to_db_uint(avg.count),
                to_db_uint(avg.avg_rating),
            ),
        )

    # --- Reports ---

    def get_report(self, content_id: int, reporter: str) -> ContentReport | None:
        row = self._one(
            "SELECT * FROM content_reports WHERE content_id = ? AND reporter = ?",
            (to_db_uint(content_id), reporter),
        )
        if not row:
            return None
        return ContentReport(
            content_id=from_db_uint(row["content_id"]),
            reporter=row["reporter"],
            reason=row["reason"],
            timestamp=from_db_uint(row["timestamp"]),
            resolved=bool(row["resolved"]),
        )

    def save_report(self, report: ContentReport) -> None:
        self._conn.execute(
            """
            INSERT INTO content_reports (content_id, reporter, reason, timestamp, resolved)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(content_id, reporter) DO UPDATE SET
                reason=excluded.reason,
                timestamp=excluded.timestamp,
                resolved=excluded.resolved
            """,
            (
                to_db_uint(report.content_id),
                report.reporter,
                report.reason,
                to_db_uint(report.timestamp),
                int(report.resolved),
            ),
        )

    def count_reports(self, content_id: int) -> int:
        row = self._one(
            "SELECT COUNT(*) AS n FROM content_reports WHERE content_id = ?",
            (to_db_uint(content_id),),
        )
        return int(row["n"]) if row else 0

    # --- Atomicity ---

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with savepoint(self._conn, "ledger"):
            yield
