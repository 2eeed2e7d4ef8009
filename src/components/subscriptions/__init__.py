"""
Subscription manager component.
"""

from .component import (
    get_subscription,
    is_subscription_active,
    load_config_from_rules,
    run,
    run_extend,
    run_grant,
)
from .models import ExtendSubscriptionInput, GrantSubscriptionInput, SubscriptionConfig
from .ports import SubscriptionRepoPort

__all__ = [
    "get_subscription",
    "is_subscription_active",
    "load_config_from_rules",
    "run",
    "run_extend",
    "run_grant",
    "ExtendSubscriptionInput",
    "GrantSubscriptionInput",
    "SubscriptionConfig",
    "SubscriptionRepoPort",
]
