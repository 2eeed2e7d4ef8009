"""
Ledger API Routes.

One endpoint per ledger operation. The caller principal comes from the
X-Caller header; failed calls return the ledger code and name in the body.

Status mapping:
- 403: NotAuthorized
- 404: ContentNotFound, SubscriptionNotFound, or an absent record on reads
- 409: AlreadyReported, SubscriptionExists
- 400: any other ledger code
- 402: settlement collaborator failures
- 422: malformed input rejected before the ledger runs
"""

from __future__ import annotations

from collections.abc import Callable
from typing import NoReturn, TypeVar, cast

from fastapi import APIRouter, Depends, HTTPException, Query

from src.api.deps import get_caller, get_ledger_context, get_ledger_service
from src.api.schemas import (
    AccessResponse,
    AdvanceRequest,
    BalanceResponse,
    CreateContentRequest,
    HeightResponse,
    LedgerErrorResponse,
    PurchaseResponse,
    RateContentRequest,
    RatingResponse,
    ReportContentRequest,
    SubscriptionRequest,
    SubscriptionStatusResponse,
    TransferOwnershipRequest,
    WithdrawalResponse,
)
from src.app_shell.context import LedgerContext
from src.domain.entities import (
    ContentAvgRating,
    ContentItem,
    ContentRating,
    ContentReport,
    Subscription,
)
from src.domain.outcome import ErrorCode, LedgerFailure, Outcome
from src.services.ledger import LedgerService

router = APIRouter()

T = TypeVar("T")

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.NOT_AUTHORIZED: 403,
    ErrorCode.CONTENT_NOT_FOUND: 404,
    ErrorCode.SUBSCRIPTION_NOT_FOUND: 404,
    ErrorCode.ALREADY_REPORTED: 409,
    ErrorCode.SUBSCRIPTION_EXISTS: 409,
}

_FAILURE_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": LedgerErrorResponse},
    402: {"model": LedgerErrorResponse},
    403: {"model": LedgerErrorResponse},
    404: {"model": LedgerErrorResponse},
    409: {"model": LedgerErrorResponse},
}


# --- Helper Functions ---


def status_for_failure(failure: LedgerFailure) -> int:
    if failure.source == "settlement":
        return 402
    return _STATUS_BY_CODE.get(ErrorCode(failure.code), 400)


def _raise_failure(failure: LedgerFailure) -> NoReturn:
    raise HTTPException(
        status_code=status_for_failure(failure),
        detail=LedgerErrorResponse(
            code=failure.code,
            name=failure.name,
            message=failure.message,
            source=failure.source,
        ).model_dump(),
    )


def _settle(call: Callable[[], Outcome[T]]) -> T:
    """Run a ledger call and unwrap its value, raising on failure."""
    try:
        outcome = call()
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    if outcome.failure is not None:
        _raise_failure(outcome.failure)

    return cast(T, outcome.value)


def _found(record: T | None, detail: str) -> T:
    if record is None:
        raise HTTPException(status_code=404, detail=detail)
    return record


# --- Content Registry ---


@router.post("/content", response_model=ContentItem, responses=_FAILURE_RESPONSES)
def create_content(
    request: CreateContentRequest,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_ledger_service),
) -> ContentItem:
    """Create content through the owner-only path."""
    return _settle(
        lambda: service.create_content(
            caller, request.content_id, request.price, request.royalty_percentage
        )
    )


@router.post("/content/premium", response_model=ContentItem, responses=_FAILURE_RESPONSES)
def create_premium_content(
    request: CreateContentRequest,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_ledger_service),
) -> ContentItem:
    """Create premium content; open to any caller."""
    return _settle(
        lambda: service.create_premium_content(
            caller, request.content_id, request.price, request.royalty_percentage
        )
    )


@router.get("/content/{content_id}", response_model=ContentItem)
def get_content(
    content_id: int,
    service: LedgerService = Depends(get_ledger_service),
) -> ContentItem:
    return _found(service.get_content_details(content_id), "Content not found")


@router.post(
    "/content/{content_id}/transfer", response_model=ContentItem, responses=_FAILURE_RESPONSES
)
def transfer_content_ownership(
    content_id: int,
    request: TransferOwnershipRequest,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_ledger_service),
) -> ContentItem:
    return _settle(
        lambda: service.transfer_content_ownership(caller, content_id, request.new_owner)
    )


# --- Access ---


@router.post(
    "/content/{content_id}/purchase", response_model=PurchaseResponse, responses=_FAILURE_RESPONSES
)
def purchase_content_access(
    content_id: int,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_ledger_service),
) -> PurchaseResponse:
    """Buy premium access; the price moves from the caller into custody."""
    receipt = _settle(lambda: service.purchase_content_access(caller, content_id))
    return PurchaseResponse(
        content_id=receipt.content_id,
        buyer=receipt.buyer,
        creator=receipt.creator,
        price=receipt.price,
        royalty_share=receipt.royalty_share,
        platform_fee=receipt.platform_fee,
    )


@router.get("/content/{content_id}/access/{user}", response_model=AccessResponse)
def has_premium_access(
    content_id: int,
    user: str,
    service: LedgerService = Depends(get_ledger_service),
) -> AccessResponse:
    return AccessResponse(
        content_id=content_id,
        user=user,
        access=service.has_premium_access(content_id, user),
    )


# --- Ratings ---


@router.post(
    "/content/{content_id}/ratings", response_model=RatingResponse, responses=_FAILURE_RESPONSES
)
def rate_content(
    content_id: int,
    request: RateContentRequest,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_ledger_service),
) -> RatingResponse:
    result = _settle(lambda: service.rate_content(caller, content_id, request.rating))
    return RatingResponse(rating=result.rating, aggregate=result.aggregate)


@router.get("/content/{content_id}/ratings/{user}", response_model=ContentRating)
def get_content_rating(
    content_id: int,
    user: str,
    service: LedgerService = Depends(get_ledger_service),
) -> ContentRating:
    return _found(service.get_content_rating(content_id, user), "Rating not found")


@router.get("/content/{content_id}/rating", response_model=ContentAvgRating)
def get_average_rating(
    content_id: int,
    service: LedgerService = Depends(get_ledger_service),
) -> ContentAvgRating:
    return _found(service.get_average_rating(content_id), "No ratings for content")


# --- Reports ---


@router.post(
    "/content/{content_id}/reports", response_model=ContentReport, responses=_FAILURE_RESPONSES
)
def report_content(
    content_id: int,
    request: ReportContentRequest,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_ledger_service),
) -> ContentReport:
    return _settle(lambda: service.report_content(caller, content_id, request.reason))


@router.get("/content/{content_id}/reports/{reporter}", response_model=ContentReport)
def get_report(
    content_id: int,
    reporter: str,
    service: LedgerService = Depends(get_ledger_service),
) -> ContentReport:
    return _found(service.get_report(content_id, reporter), "Report not found")


# --- Royalties ---


@router.get("/royalties/{creator}", response_model=BalanceResponse)
def get_royalty_balance(
    creator: str,
    service: LedgerService = Depends(get_ledger_service),
) -> BalanceResponse:
    return BalanceResponse(account=creator, balance=service.get_royalty_balance(creator))


@router.post("/royalties/withdraw", response_model=WithdrawalResponse, responses=_FAILURE_RESPONSES)
def withdraw_royalties(
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_ledger_service),
) -> WithdrawalResponse:
    """Pay the caller's whole accrued balance out of custody."""
    receipt = _settle(lambda: service.withdraw_royalties(caller))
    return WithdrawalResponse(creator=receipt.creator, amount=receipt.amount)


@router.get("/custody/balance", response_model=BalanceResponse)
def get_custodial_balance(
    service: LedgerService = Depends(get_ledger_service),
) -> BalanceResponse:
    return BalanceResponse(
        account=service.config.custodian, balance=service.get_custodial_balance()
    )


# --- Subscriptions ---


@router.post("/subscriptions", response_model=Subscription, responses=_FAILURE_RESPONSES)
def grant_subscription(
    request: SubscriptionRequest,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_ledger_service),
) -> Subscription:
    return _settle(
        lambda: service.grant_subscription(
            caller, request.subscriber, request.creator, request.duration
        )
    )


@router.post("/subscriptions/extend", response_model=Subscription, responses=_FAILURE_RESPONSES)
def extend_subscription(
    request: SubscriptionRequest,
    caller: str = Depends(get_caller),
    service: LedgerService = Depends(get_ledger_service),
) -> Subscription:
    return _settle(
        lambda: service.extend_subscription(
            caller, request.subscriber, request.creator, request.duration
        )
    )


@router.get("/subscriptions/{subscriber}", response_model=Subscription)
def get_subscription(
    subscriber: str,
    service: LedgerService = Depends(get_ledger_service),
) -> Subscription:
    return _found(service.get_subscription(subscriber), "Subscription not found")


@router.get("/subscriptions/{subscriber}/active", response_model=SubscriptionStatusResponse)
def is_subscription_active(
    subscriber: str,
    block_height: int | None = Query(None, ge=0),
    service: LedgerService = Depends(get_ledger_service),
) -> SubscriptionStatusResponse:
    height = service.block_height() if block_height is None else block_height
    return SubscriptionStatusResponse(
        subscriber=subscriber,
        block_height=height,
        active=service.is_subscription_active(subscriber, height),
    )


# --- Chain ---


@router.get("/chain/height", response_model=HeightResponse)
def get_block_height(ctx: LedgerContext = Depends(get_ledger_context)) -> HeightResponse:
    return HeightResponse(height=ctx.service.block_height())


@router.post("/chain/advance", response_model=HeightResponse)
def advance_block_height(
    request: AdvanceRequest,
    ctx: LedgerContext = Depends(get_ledger_context),
) -> HeightResponse:
    """Move the local block height forward (dev and test deployments)."""
    with ctx.service.exclusive():
        height = ctx.clock.advance(request.blocks)
    return HeightResponse(height=height)
