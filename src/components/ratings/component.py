"""
Rating aggregator component.

Per-user ratings and the running average per content item.

Invariants:
- Only holders of a premium grant may rate
- avg_rating == total_rating // count after every update
- total_rating and count grow on every successful call, including a repeat
  rating by the same user, while that user's record is simply overwritten
"""

from __future__ import annotations

from src.components.access import has_premium_access
from src.domain.context import CallContext
from src.domain.entities import ContentAvgRating, ContentRating, checked_add, require_uint
from src.domain.outcome import ErrorCode, Outcome
from src.rules.models import Rules

from .models import RateContentInput, RateContentOutput, RatingConfig
from .ports import ContentRepoPort, GrantRepoPort, RatingRepoPort

# --- Pure Functions ---


def compute_average(total_rating: int, count: int) -> int:
    """Truncating integer mean; 0 for an empty aggregate."""
    if count == 0:
        return 0
    return total_rating // count


def is_valid_rating(rating: int, config: RatingConfig) -> bool:
    return config.min_rating <= rating <= config.max_rating


def apply_rating(aggregate: ContentAvgRating | None, content_id: int, rating: int) -> ContentAvgRating:
    """Fold one rating into an aggregate (new or existing)."""
    total = rating if aggregate is None else checked_add(aggregate.total_rating, rating)
    count = 1 if aggregate is None else checked_add(aggregate.count, 1)
    return ContentAvgRating(
        content_id=content_id,
        total_rating=total,
        count=count,
        avg_rating=compute_average(total, count),
    )


# --- Component Entry Points ---


def run_rate(
    inp: RateContentInput,
    ctx: CallContext,
    *,
    content_repo: ContentRepoPort,
    grant_repo: GrantRepoPort,
    rating_repo: RatingRepoPort,
    config: RatingConfig | None = None,
) -> Outcome[RateContentOutput]:
    """
    Rate a content item the caller has purchased.

    Check order: content exists, rating in range, caller holds a grant.

    Args:
        inp: Content id and rating value
        ctx: Caller context (caller and block height for the timestamp)
        content_repo: Content repository port
        grant_repo: Grant repository port
        rating_repo: Rating repository port
        config: Optional rating bounds

    Returns:
        Outcome with the caller's rating and the updated aggregate
    """
    config = config or RatingConfig()
    require_uint(inp.rating, "rating")

    if content_repo.get_content(inp.content_id) is None:
        return Outcome.fail(ErrorCode.CONTENT_NOT_FOUND, f"Content {inp.content_id} not found")

    if not is_valid_rating(inp.rating, config):
        return Outcome.fail(
            ErrorCode.INVALID_RATING,
            f"Rating must be between {config.min_rating} and {config.max_rating}",
        )

    if not has_premium_access(inp.content_id, ctx.caller, repo=grant_repo):
        return Outcome.fail(ErrorCode.NOT_AUTHORIZED, "Rating requires premium access")

    record = ContentRating(
        content_id=inp.content_id,
        user=ctx.caller,
        rating=inp.rating,
        timestamp=ctx.block_height,
    )
    rating_repo.save_rating(record)

    aggregate = apply_rating(rating_repo.get_avg_rating(inp.content_id), inp.content_id, inp.rating)
    rating_repo.save_avg_rating(aggregate)

    return Outcome.ok(RateContentOutput(rating=record, aggregate=aggregate))


def get_content_rating(
    content_id: int, user: str, *, repo: RatingRepoPort
) -> ContentRating | None:
    return repo.get_rating(content_id, user)


def get_average_rating(content_id: int, *, repo: RatingRepoPort) -> ContentAvgRating | None:
    return repo.get_avg_rating(content_id)


# --- Run Function (Atomic Component Pattern) ---


def run(
    inp: RateContentInput,
    ctx: CallContext,
    *,
    content_repo: ContentRepoPort,
    grant_repo: GrantRepoPort,
    rating_repo: RatingRepoPort,
    config: RatingConfig | None = None,
) -> Outcome[RateContentOutput]:
    """Dispatch a rating operation based on input type."""
    if isinstance(inp, RateContentInput):
        return run_rate(
            inp,
            ctx,
            content_repo=content_repo,
            grant_repo=grant_repo,
            rating_repo=rating_repo,
            config=config,
        )
    raise TypeError(f"Unknown input type: {type(inp)}")


def load_config_from_rules(rules: Rules) -> RatingConfig:
    return RatingConfig(
        min_rating=rules.ratings.min_rating,
        max_rating=rules.ratings.max_rating,
    )
