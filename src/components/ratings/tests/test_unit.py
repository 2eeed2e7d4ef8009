"""
Unit tests for the rating aggregator component.
"""

from __future__ import annotations

import pytest

from src.components.ratings.component import (
    apply_rating,
    compute_average,
    get_average_rating,
    get_content_rating,
    is_valid_rating,
    load_config_from_rules,
    run,
    run_rate,
)
from src.components.ratings.models import RateContentInput, RatingConfig
from src.domain.context import CallContext
from src.domain.entities import (
    ContentAvgRating,
    ContentItem,
    ContentRating,
    PremiumAccessGrant,
)
from src.domain.outcome import ErrorCode
from src.rules.models import Rules

ALICE = "SP_ALICE"
BUYER = "SP_BUYER"
OTHER_BUYER = "SP_OTHER"


# --- Test Fixtures ---


class FakeStore:
    def __init__(self) -> None:
        self.content: dict[int, ContentItem] = {}
        self.grants: dict[tuple[int, str], PremiumAccessGrant] = {}
        self.ratings: dict[tuple[int, str], ContentRating] = {}
        self.averages: dict[int, ContentAvgRating] = {}

    def get_content(self, content_id: int) -> ContentItem | None:
        return self.content.get(content_id)

    def get_grant(self, content_id: int, user: str) -> PremiumAccessGrant | None:
        return self.grants.get((content_id, user))

    def get_rating(self, content_id: int, user: str) -> ContentRating | None:
        return self.ratings.get((content_id, user))

    def save_rating(self, rating: ContentRating) -> None:
        self.ratings[(rating.content_id, rating.user)] = rating

    def get_avg_rating(self, content_id: int) -> ContentAvgRating | None:
        return self.averages.get(content_id)

    def save_avg_rating(self, avg: ContentAvgRating) -> None:
        self.averages[avg.content_id] = avg


@pytest.fixture
def store() -> FakeStore:
    s = FakeStore()
    s.content[1] = ContentItem(id=1, creator=ALICE, price=100, royalty_percentage=10)
    s.grants[(1, BUYER)] = PremiumAccessGrant(content_id=1, user=BUYER)
    s.grants[(1, OTHER_BUYER)] = PremiumAccessGrant(content_id=1, user=OTHER_BUYER)
    return s


def _rate(store: FakeStore, caller: str, rating: int, content_id: int = 1, height: int = 3):
    return run_rate(
        RateContentInput(content_id, rating),
        CallContext(caller, height),
        content_repo=store,
        grant_repo=store,
        rating_repo=store,
    )


# --- Pure Functions ---


class TestPureFunctions:
    def test_compute_average_truncates(self) -> None:
        assert compute_average(9, 2) == 4
        assert compute_average(5, 1) == 5

    def test_compute_average_empty(self) -> None:
        assert compute_average(0, 0) == 0

    @pytest.mark.parametrize("rating,valid", [(0, False), (1, True), (5, True), (6, False)])
    def test_is_valid_rating(self, rating: int, valid: bool) -> None:
        assert is_valid_rating(rating, RatingConfig()) is valid

    def test_apply_rating_to_new_aggregate(self) -> None:
        assert apply_rating(None, 1, 4) == ContentAvgRating(
            content_id=1, total_rating=4, count=1, avg_rating=4
        )

    def test_apply_rating_folds_into_existing(self) -> None:
        agg = ContentAvgRating(content_id=1, total_rating=4, count=1, avg_rating=4)
        assert apply_rating(agg, 1, 5) == ContentAvgRating(
            content_id=1, total_rating=9, count=2, avg_rating=4
        )


# --- Rate ---


class TestRate:
    def test_first_rating(self, store: FakeStore) -> None:
        outcome = _rate(store, BUYER, 4, height=12)

        assert outcome.success
        assert outcome.value is not None
        assert outcome.value.rating == ContentRating(content_id=1, user=BUYER, rating=4, timestamp=12)
        assert store.averages[1] == ContentAvgRating(
            content_id=1, total_rating=4, count=1, avg_rating=4
        )

    def test_average_over_two_users(self, store: FakeStore) -> None:
        _rate(store, BUYER, 4)
        _rate(store, OTHER_BUYER, 5)

        assert store.averages[1].avg_rating == 4
        assert store.averages[1].count == 2

    def test_repeat_rating_overwrites_record_but_counts_twice(self, store: FakeStore) -> None:
        _rate(store, BUYER, 2)
        _rate(store, BUYER, 5)

        assert store.ratings[(1, BUYER)].rating == 5
        assert store.averages[1] == ContentAvgRating(
            content_id=1, total_rating=7, count=2, avg_rating=3
        )

    def test_unknown_content(self, store: FakeStore) -> None:
        outcome = _rate(store, BUYER, 4, content_id=99)

        assert outcome.failure is not None
        assert outcome.failure.code == ErrorCode.CONTENT_NOT_FOUND

    @pytest.mark.parametrize("rating", [0, 6])
    def test_out_of_range(self, store: FakeStore, rating: int) -> None:
        outcome = _rate(store, BUYER, rating)

        assert outcome.failure is not None
        assert outcome.failure.code == ErrorCode.INVALID_RATING
        assert store.averages == {}

    def test_range_checked_before_access(self, store: FakeStore) -> None:
        outcome = _rate(store, "SP_NO_GRANT", 9)

        assert outcome.failure is not None
        assert outcome.failure.code == ErrorCode.INVALID_RATING

    def test_requires_premium_access(self, store: FakeStore) -> None:
        outcome = _rate(store, "SP_NO_GRANT", 3)

        assert outcome.failure is not None
        assert outcome.failure.code == ErrorCode.NOT_AUTHORIZED
        assert store.ratings == {}

    def test_custom_bounds(self, store: FakeStore) -> None:
        outcome = run_rate(
            RateContentInput(1, 10),
            CallContext(BUYER, 0),
            content_repo=store,
            grant_repo=store,
            rating_repo=store,
            config=RatingConfig(min_rating=1, max_rating=10),
        )

        assert outcome.success


def test_reads(store: FakeStore) -> None:
    assert get_content_rating(1, BUYER, repo=store) is None
    assert get_average_rating(1, repo=store) is None

    _rate(store, BUYER, 3)

    rating = get_content_rating(1, BUYER, repo=store)
    assert rating is not None and rating.rating == 3
    avg = get_average_rating(1, repo=store)
    assert avg is not None and avg.avg_rating == 3


def test_load_config_from_rules() -> None:
    rules = Rules.model_validate(
        {
            "project": {"slug": "t", "rules_version": "1"},
            "ledger": {"owner": "A", "custodian": "B"},
            "ratings": {"min_rating": 1, "max_rating": 10},
        }
    )
    assert load_config_from_rules(rules) == RatingConfig(min_rating=1, max_rating=10)


def test_run_dispatches_by_input_type(store: FakeStore) -> None:
    ctx = CallContext(BUYER, 0)

    outcome = run(
        RateContentInput(1, 4), ctx, content_repo=store, grant_repo=store, rating_repo=store
    )
    assert outcome.success
    assert store.ratings[(1, BUYER)].rating == 4

    with pytest.raises(TypeError):
        run(object(), ctx, content_repo=store, grant_repo=store, rating_repo=store)  # type: ignore[arg-type]
