"""
Access control component.

Public API for premium purchases and grant checks.
"""

from .component import (
    compute_royalty_share,
    has_premium_access,
    load_config_from_rules,
    run,
    run_purchase,
)
from .models import AccessConfig, PurchaseAccessInput, PurchaseReceipt
from .ports import (
    ContentRepoPort,
    GrantRepoPort,
    PaymentCapturePort,
    RoyaltyRepoPort,
)

__all__ = [
    # Functions
    "compute_royalty_share",
    "has_premium_access",
    "load_config_from_rules",
    "run",
    "run_purchase",
    # Models
    "AccessConfig",
    "PurchaseAccessInput",
    "PurchaseReceipt",
    # Ports
    "ContentRepoPort",
    "GrantRepoPort",
    "PaymentCapturePort",
    "RoyaltyRepoPort",
]
