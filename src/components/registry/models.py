"""
Content registry component models.

Inputs and configuration for content creation and ownership transfer.
"""

from __future__ import annotations

from dataclasses import dataclass

# --- Input Models ---


@dataclass(frozen=True)
class CreateContentInput:
    """Input for the owner-only basic creation path."""

    content_id: int
    price: int
    royalty_percentage: int


@dataclass(frozen=True)
class CreatePremiumContentInput:
    """Input for the open premium path (royalty bounded by config)."""

    content_id: int
    price: int
    royalty_percentage: int


@dataclass(frozen=True)
class TransferOwnershipInput:
    """Input for handing a content item to a new creator."""

    content_id: int
    new_owner: str


# --- Configuration ---


@dataclass(frozen=True)
class RegistryConfig:
    """
    Registry configuration from rules.

    owner is the privileged identity fixed at deployment.
    """

    owner: str
    premium_max_royalty: int = 50
    max_royalty: int = 100
