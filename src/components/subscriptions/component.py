"""
Subscription manager component.

Time-bound subscription records keyed by subscriber, with expiry in blocks.

Invariants:
- At most one record per subscriber, whatever the creator
- Expiry never decreases
- Expiry beyond uint128 aborts the call (ArithmeticOverflow)
"""

from __future__ import annotations

from src.domain.context import CallContext
from src.domain.entities import Subscription, checked_add, require_uint
from src.domain.outcome import ErrorCode, Outcome
from src.rules.models import Rules

from .models import ExtendSubscriptionInput, GrantSubscriptionInput, SubscriptionConfig
from .ports import SubscriptionRepoPort


def run_grant(
    inp: GrantSubscriptionInput,
    ctx: CallContext,
    *,
    repo: SubscriptionRepoPort,
    config: SubscriptionConfig,
) -> Outcome[Subscription]:
    """
    Open a subscription for a subscriber with no existing record.

    Owner only. Expiry starts at the current block height plus duration.
    """
    require_uint(inp.duration, "duration")

    if ctx.caller != config.owner:
        return Outcome.fail(ErrorCode.NOT_AUTHORIZED, "Only the contract owner may grant subscriptions")

    if inp.duration == 0:
        return Outcome.fail(ErrorCode.INVALID_AMOUNT, "Subscription duration must be positive")

    if repo.get_subscription(inp.subscriber) is not None:
        return Outcome.fail(
            ErrorCode.SUBSCRIPTION_EXISTS, f"{inp.subscriber} already holds a subscription"
        )

    subscription = Subscription(
        subscriber=inp.subscriber,
        creator=inp.creator,
        expiry=checked_add(ctx.block_height, inp.duration),
    )
    repo.save_subscription(subscription)
    return Outcome.ok(subscription)


def run_extend(
    inp: ExtendSubscriptionInput,
    ctx: CallContext,
    *,
    repo: SubscriptionRepoPort,
    config: SubscriptionConfig,
) -> Outcome[Subscription]:
    """
    Push a subscription's expiry out by duration blocks.

    Caller must be the owner or the subscriber. The creator argument
    overwrites the stored creator without any check.

    Args:
        inp: Subscriber, creator and duration
        ctx: Caller context
        repo: Subscription repository port
        config: Subscription configuration (privileged owner)

    Returns:
        Outcome with the updated Subscription
    """
    require_uint(inp.duration, "duration")

    if ctx.caller not in (config.owner, inp.subscriber):
        return Outcome.fail(ErrorCode.NOT_AUTHORIZED, "Only the owner or subscriber may extend")

    current = repo.get_subscription(inp.subscriber)
    if current is None:
        return Outcome.fail(
            ErrorCode.SUBSCRIPTION_NOT_FOUND, f"No subscription for {inp.subscriber}"
        )

    updated = current.model_copy(
        update={
            "creator": inp.creator,
            "expiry": checked_add(current.expiry, inp.duration),
        }
    )
    repo.save_subscription(updated)
    return Outcome.ok(updated)


def get_subscription(subscriber: str, *, repo: SubscriptionRepoPort) -> Subscription | None:
    return repo.get_subscription(subscriber)


def is_subscription_active(
    subscriber: str, block_height: int, *, repo: SubscriptionRepoPort
) -> bool:
    """A subscription is active strictly before its expiry height."""
    subscription = repo.get_subscription(subscriber)
    return subscription is not None and block_height < subscription.expiry


def run(
    inp: GrantSubscriptionInput | ExtendSubscriptionInput,
    ctx: CallContext,
    *,
    repo: SubscriptionRepoPort,
    config: SubscriptionConfig,
) -> Outcome[Subscription]:
    if isinstance(inp, GrantSubscriptionInput):
        return run_grant(inp, ctx, repo=repo, config=config)
    elif isinstance(inp, ExtendSubscriptionInput):
        return run_extend(inp, ctx, repo=repo, config=config)
    else:
        raise TypeError(f"Unknown input type: {type(inp)}")


def load_config_from_rules(rules: Rules) -> SubscriptionConfig:
    return SubscriptionConfig(owner=rules.ledger.owner)
