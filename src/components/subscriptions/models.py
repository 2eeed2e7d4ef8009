"""
Subscription manager component models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GrantSubscriptionInput:
    """Input for opening a subscriber's first subscription record."""

    subscriber: str
    creator: str
    duration: int  # blocks


@dataclass(frozen=True)
class ExtendSubscriptionInput:
    """
    Input for extending an existing subscription.

    creator replaces the stored creator as-is.
    """

    subscriber: str
    creator: str
    duration: int  # blocks


@dataclass(frozen=True)
class SubscriptionConfig:
    owner: str
