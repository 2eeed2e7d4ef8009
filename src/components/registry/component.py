"""
Content registry component.

Creation and ownership transfer of content records.

Invariants:
- A content id is written once; price and royalty never change afterwards
- Premium items carry a royalty in (0, premium_max_royalty]
- A duplicate id is rejected with ContentNotFound (the registry reuses the
  not-found code for "already exists")
"""

from __future__ import annotations

from src.domain.context import CallContext
from src.domain.entities import ContentItem, require_uint
from src.domain.outcome import ErrorCode, Outcome
from src.rules.models import Rules

from .models import (
    CreateContentInput,
    CreatePremiumContentInput,
    RegistryConfig,
    TransferOwnershipInput,
)
from .ports import ContentRepoPort

# --- Pure Functions ---


def is_valid_premium_royalty(royalty_percentage: int, config: RegistryConfig) -> bool:
    """Premium royalty must be strictly positive and at most the configured cap."""
    return 0 < royalty_percentage <= config.premium_max_royalty


def _insert(
    content_id: int,
    price: int,
    royalty_percentage: int,
    ctx: CallContext,
    repo: ContentRepoPort,
) -> Outcome[ContentItem]:
    if repo.get_content(content_id) is not None:
        return Outcome.fail(ErrorCode.CONTENT_NOT_FOUND, f"Content {content_id} already exists")

    item = ContentItem(
        id=content_id,
        creator=ctx.caller,
        price=price,
        royalty_percentage=royalty_percentage,
    )
    repo.save_content(item)
    return Outcome.ok(item)


# --- Component Entry Points ---


def run_create_content(
    inp: CreateContentInput,
    ctx: CallContext,
    *,
    repo: ContentRepoPort,
    config: RegistryConfig,
) -> Outcome[ContentItem]:
    """
    Create content through the owner-only path.

    Args:
        inp: Content id, price and royalty percentage
        ctx: Caller context; caller becomes the creator
        repo: Content repository port
        config: Registry configuration holding the privileged owner

    Returns:
        Outcome with the stored ContentItem
    """
    require_uint(inp.content_id, "content_id")
    require_uint(inp.price, "price")
    require_uint(inp.royalty_percentage, "royalty_percentage")

    if ctx.caller != config.owner:
        return Outcome.fail(ErrorCode.NOT_AUTHORIZED, "Only the contract owner may create content")

    if inp.royalty_percentage > config.max_royalty:
        return Outcome.fail(
            ErrorCode.INVALID_ROYALTY,
            f"Royalty {inp.royalty_percentage}% exceeds {config.max_royalty}%",
        )

    return _insert(inp.content_id, inp.price, inp.royalty_percentage, ctx, repo)


def run_create_premium_content(
    inp: CreatePremiumContentInput,
    ctx: CallContext,
    *,
    repo: ContentRepoPort,
    config: RegistryConfig,
) -> Outcome[ContentItem]:
    """Create content through the open premium path."""
    require_uint(inp.content_id, "content_id")
    require_uint(inp.price, "price")
    require_uint(inp.royalty_percentage, "royalty_percentage")

    if not is_valid_premium_royalty(inp.royalty_percentage, config):
        return Outcome.fail(
            ErrorCode.INVALID_ROYALTY,
            f"Premium royalty must be in (0, {config.premium_max_royalty}]",
        )

    return _insert(inp.content_id, inp.price, inp.royalty_percentage, ctx, repo)


def run_transfer_ownership(
    inp: TransferOwnershipInput,
    ctx: CallContext,
    *,
    repo: ContentRepoPort,
) -> Outcome[ContentItem]:
    """
    Hand a content item to a new creator.

    Only the current creator may transfer. Price and royalty are preserved.
    """
    item = repo.get_content(inp.content_id)
    if item is None:
        return Outcome.fail(ErrorCode.CONTENT_NOT_FOUND, f"Content {inp.content_id} not found")

    if ctx.caller != item.creator:
        return Outcome.fail(ErrorCode.NOT_AUTHORIZED, "Only the current creator may transfer")

    updated = item.model_copy(update={"creator": inp.new_owner})
    repo.save_content(updated)
    return Outcome.ok(updated)


def get_content_details(content_id: int, *, repo: ContentRepoPort) -> ContentItem | None:
    """Read a content record; None when absent."""
    return repo.get_content(content_id)


# --- Run Function (Atomic Component Pattern) ---


def run(
    inp: CreateContentInput | CreatePremiumContentInput | TransferOwnershipInput,
    ctx: CallContext,
    *,
    repo: ContentRepoPort,
    config: RegistryConfig,
) -> Outcome[ContentItem]:
    """Dispatch a registry operation based on input type."""
    if isinstance(inp, CreateContentInput):
        return run_create_content(inp, ctx, repo=repo, config=config)

    if isinstance(inp, CreatePremiumContentInput):
        return run_create_premium_content(inp, ctx, repo=repo, config=config)

    if isinstance(inp, TransferOwnershipInput):
        return run_transfer_ownership(inp, ctx, repo=repo)

    raise TypeError(f"Unknown input type: {type(inp)}")


# --- Configuration Loader ---


def load_config_from_rules(rules: Rules) -> RegistryConfig:
    """Build RegistryConfig from validated rules."""
    return RegistryConfig(
        owner=rules.ledger.owner,
        premium_max_royalty=rules.royalties.premium_max_percent,
        max_royalty=rules.royalties.max_percent,
    )
