"""
Unit tests for the in-memory ledger store.
"""

import pytest

from src.adapters.memory_store import InMemoryLedgerStore
from src.core.ports.store import LedgerStorePort
from src.domain.entities import (
    ContentAvgRating,
    ContentItem,
    ContentReport,
    PremiumAccessGrant,
    RoyaltyBalance,
    Subscription,
)


@pytest.fixture
def store() -> InMemoryLedgerStore:
    return InMemoryLedgerStore()


def test_satisfies_store_port(store: InMemoryLedgerStore) -> None:
    port: LedgerStorePort = store
    assert port.get_content(1) is None


def test_upsert_by_key(store: InMemoryLedgerStore) -> None:
    store.save_subscription(Subscription(subscriber="S", creator="A", expiry=5))
    store.save_subscription(Subscription(subscriber="S", creator="B", expiry=9))

    assert store.get_subscription("S") == Subscription(subscriber="S", creator="B", expiry=9)
    assert store.count("subscriptions") == 1


def test_composite_keys(store: InMemoryLedgerStore) -> None:
    store.save_grant(PremiumAccessGrant(content_id=1, user="U1"))
    store.save_grant(PremiumAccessGrant(content_id=1, user="U2"))
    store.save_grant(PremiumAccessGrant(content_id=2, user="U1"))

    assert store.count("grants") == 3
    assert store.get_grant(2, "U2") is None


def test_reads_return_copies(store: InMemoryLedgerStore) -> None:
    store.save_royalty(RoyaltyBalance(creator="C", balance=10))

    record = store.get_royalty("C")
    assert record is not None
    record.balance = 999

    assert store.get_royalty("C") == RoyaltyBalance(creator="C", balance=10)


def test_transaction_commits_on_clean_exit(store: InMemoryLedgerStore) -> None:
    with store.transaction():
        store.save_content(ContentItem(id=1, creator="C", price=1, royalty_percentage=1))

    assert store.get_content(1) is not None


def test_transaction_restores_on_exception(store: InMemoryLedgerStore) -> None:
    store.save_avg_rating(ContentAvgRating(content_id=1, total_rating=3, count=1, avg_rating=3))

    with pytest.raises(RuntimeError):
        with store.transaction():
            store.save_avg_rating(
                ContentAvgRating(content_id=1, total_rating=8, count=2, avg_rating=4)
            )
            store.save_report(ContentReport(content_id=1, reporter="R", reason="x", timestamp=0))
            raise RuntimeError("boom")

    avg = store.get_avg_rating(1)
    assert avg is not None and avg.count == 1
    assert store.get_report(1, "R") is None


def test_inner_rollback_keeps_outer_writes(store: InMemoryLedgerStore) -> None:
    with store.transaction():
        store.save_royalty(RoyaltyBalance(creator="C", balance=1))
        with pytest.raises(RuntimeError):
            with store.transaction():
                store.save_royalty(RoyaltyBalance(creator="C", balance=2))
                raise RuntimeError("inner")

    assert store.get_royalty("C") == RoyaltyBalance(creator="C", balance=1)


def test_row_of_wrong_type_is_rejected(store: InMemoryLedgerStore) -> None:
    store._put("content", 1, RoyaltyBalance(creator="A", balance=1))

    with pytest.raises(TypeError, match="expected ContentItem"):
        store.get_content(1)
