from pydantic import BaseModel, Field

# Host integer width (uint128). Arithmetic beyond it aborts the call.
UINT_MAX = 2**128 - 1

Principal = str
Uint = int

# --- Content ---

class ContentItem(BaseModel):
    id: Uint = Field(ge=0, le=UINT_MAX)
    creator: Principal
    price: Uint = Field(ge=0, le=UINT_MAX)
    royalty_percentage: Uint = Field(ge=0, le=100)

# --- Subscriptions ---

class Subscription(BaseModel):
    subscriber: Principal
    creator: Principal
    expiry: Uint = Field(ge=0, le=UINT_MAX)  # block height

# --- Royalties ---

class RoyaltyBalance(BaseModel):
    creator: Principal
    balance: Uint = Field(default=0, ge=0, le=UINT_MAX)

# --- Access ---

class PremiumAccessGrant(BaseModel):
    content_id: Uint
    user: Principal
    access: bool = True

# --- Ratings ---

class ContentRating(BaseModel):
    content_id: Uint
    user: Principal
    rating: Uint = Field(ge=0)
    timestamp: Uint  # block height

class ContentAvgRating(BaseModel):
    content_id: Uint
    total_rating: Uint = 0
    count: Uint = 0
    avg_rating: Uint = 0

# --- Reports ---

class ContentReport(BaseModel):
    content_id: Uint
    reporter: Principal
    reason: str
    timestamp: Uint  # block height
    resolved: bool = False


class ArithmeticOverflow(OverflowError):
    """Raised when a ledger value would exceed the host integer width."""


def checked_add(a: int, b: int) -> int:
    total = a + b
    if total > UINT_MAX:
        raise ArithmeticOverflow(f"{a} + {b} exceeds uint128")
    return total


def require_uint(value: int, name: str) -> int:
    """Reject values the host would never accept as an unsigned integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > UINT_MAX:
        raise ValueError(f"{name} out of uint128 range: {value}")
    return value
