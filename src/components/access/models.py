"""
Access control component models.

Purchase inputs and the settlement receipt.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PurchaseAccessInput:
    """Input for buying one-time premium access to a content item."""

    content_id: int


@dataclass(frozen=True)
class PurchaseReceipt:
    """
    Output of a settled purchase.

    platform_fee is what custody retains (price - royalty_share). It is not
    tracked anywhere else.
    """

    content_id: int
    buyer: str
    creator: str
    price: int
    royalty_share: int
    platform_fee: int


@dataclass(frozen=True)
class AccessConfig:
    """custodian receives every purchase payment."""

    custodian: str
