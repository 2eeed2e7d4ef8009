from pydantic import BaseModel, Field

from src.domain.entities import UINT_MAX, ContentAvgRating, ContentRating


# --- Content ---
class CreateContentRequest(BaseModel):
    content_id: int = Field(..., ge=0, le=UINT_MAX)
    price: int = Field(..., ge=0, le=UINT_MAX)
    royalty_percentage: int = Field(..., ge=0, le=UINT_MAX)


class TransferOwnershipRequest(BaseModel):
    new_owner: str = Field(..., min_length=1)


# --- Access ---
class PurchaseResponse(BaseModel):
    content_id: int
    buyer: str
    creator: str
    price: int
    royalty_share: int
    platform_fee: int


class AccessResponse(BaseModel):
    content_id: int
    user: str
    access: bool


# --- Royalties ---
class BalanceResponse(BaseModel):
    account: str
    balance: int


class WithdrawalResponse(BaseModel):
    creator: str
    amount: int


# --- Subscriptions ---
class SubscriptionRequest(BaseModel):
    subscriber: str = Field(..., min_length=1)
    creator: str = Field(..., min_length=1)
    duration: int = Field(..., ge=0, le=UINT_MAX, description="Blocks")


class SubscriptionStatusResponse(BaseModel):
    subscriber: str
    block_height: int
    active: bool


# --- Ratings ---
class RateContentRequest(BaseModel):
    rating: int = Field(..., ge=0, le=UINT_MAX)


class RatingResponse(BaseModel):
    rating: ContentRating
    aggregate: ContentAvgRating


# --- Reports ---
class ReportContentRequest(BaseModel):
    reason: str


# --- Chain ---
class AdvanceRequest(BaseModel):
    blocks: int = Field(default=1, ge=0)


class HeightResponse(BaseModel):
    height: int


# --- Errors ---
class LedgerErrorResponse(BaseModel):
    code: int
    name: str
    message: str
    source: str
