"""
Access control and purchase settlement component.

Captures payment, accrues the creator's royalty and issues the access grant
as one unit.

Invariants:
- No payment is attempted for unknown content
- A failed capture leaves every table untouched
- royalty_share = price * royalty_percentage // 100 (truncating)
- The grant is set-membership: a repeat purchase rewrites the same record,
  but charges and accrues again
"""

from __future__ import annotations

from src.components.royalties import accrue
from src.domain.context import CallContext
from src.domain.entities import PremiumAccessGrant
from src.domain.outcome import ErrorCode, LedgerFailure, Outcome
from src.rules.models import Rules

from .models import AccessConfig, PurchaseAccessInput, PurchaseReceipt
from .ports import (
    ContentRepoPort,
    GrantRepoPort,
    PaymentCapturePort,
    RoyaltyRepoPort,
)

# --- Pure Functions ---


def compute_royalty_share(price: int, royalty_percentage: int) -> int:
    """Creator's cut of a purchase, truncated toward zero."""
    return price * royalty_percentage // 100


# --- Component Entry Points ---


def run_purchase(
    inp: PurchaseAccessInput,
    ctx: CallContext,
    *,
    content_repo: ContentRepoPort,
    grant_repo: GrantRepoPort,
    royalty_repo: RoyaltyRepoPort,
    payment: PaymentCapturePort,
    config: AccessConfig,
) -> Outcome[PurchaseReceipt]:
    """
    Buy premium access to a content item.

    Steps: look up content, capture price into custody, accrue the royalty
    share to the creator, write the grant.

    Args:
        inp: Content to purchase
        ctx: Caller context; the caller is the buyer
        content_repo: Content repository port
        grant_repo: Grant repository port
        royalty_repo: Royalty repository port
        payment: Value transfer port
        config: Access configuration (custodial account)

    Returns:
        Outcome with the PurchaseReceipt, or the collaborator's failure
    """
    item = content_repo.get_content(inp.content_id)
    if item is None:
        return Outcome.fail(ErrorCode.CONTENT_NOT_FOUND, f"Content {inp.content_id} not found")

    captured = payment.transfer(item.price, ctx.caller, config.custodian)
    if not captured.success:
        return Outcome.failed(LedgerFailure.from_settlement(captured.code, captured.reason))

    royalty_share = compute_royalty_share(item.price, item.royalty_percentage)
    accrue(item.creator, royalty_share, repo=royalty_repo)

    grant_repo.save_grant(PremiumAccessGrant(content_id=item.id, user=ctx.caller))

    return Outcome.ok(
        PurchaseReceipt(
            content_id=item.id,
            buyer=ctx.caller,
            creator=item.creator,
            price=item.price,
            royalty_share=royalty_share,
            platform_fee=item.price - royalty_share,
        )
    )


def has_premium_access(content_id: int, user: str, *, repo: GrantRepoPort) -> bool:
    """True iff a grant record exists for (content_id, user)."""
    return repo.get_grant(content_id, user) is not None


def run(
    inp: PurchaseAccessInput,
    ctx: CallContext,
    *,
    content_repo: ContentRepoPort,
    grant_repo: GrantRepoPort,
    royalty_repo: RoyaltyRepoPort,
    payment: PaymentCapturePort,
    config: AccessConfig,
) -> Outcome[PurchaseReceipt]:
    """Main entry point for the access component."""
    if isinstance(inp, PurchaseAccessInput):
        return run_purchase(
            inp,
            ctx,
            content_repo=content_repo,
            grant_repo=grant_repo,
            royalty_repo=royalty_repo,
            payment=payment,
            config=config,
        )
    raise TypeError(f"Unknown input type: {type(inp)}")


def load_config_from_rules(rules: Rules) -> AccessConfig:
    return AccessConfig(custodian=rules.ledger.custodian)
