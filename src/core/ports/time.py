"""
Block height port.

The host supplies a monotonically increasing block height with every call.
Subscription expiry and rating/report timestamps are expressed in it.
"""

from __future__ import annotations

from typing import Protocol


class BlockClockPort(Protocol):
    """Source of the current block height."""

    def current_height(self) -> int:
        """Get the height at which the current call executes."""
        ...
