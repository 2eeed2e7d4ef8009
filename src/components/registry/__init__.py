"""
Content registry component.

Public API for creating content and transferring ownership.
"""

from .component import (
    get_content_details,
    is_valid_premium_royalty,
    load_config_from_rules,
    run,
    run_create_content,
    run_create_premium_content,
    run_transfer_ownership,
)
from .models import (
    CreateContentInput,
    CreatePremiumContentInput,
    RegistryConfig,
    TransferOwnershipInput,
)
from .ports import ContentRepoPort

__all__ = [
    # Functions
    "get_content_details",
    "is_valid_premium_royalty",
    "load_config_from_rules",
    "run",
    "run_create_content",
    "run_create_premium_content",
    "run_transfer_ownership",
    # Models
    "CreateContentInput",
    "CreatePremiumContentInput",
    "RegistryConfig",
    "TransferOwnershipInput",
    # Ports
    "ContentRepoPort",
]
