from typing import Protocol

from src.core.ports.settlement import TransferResult
from src.domain.entities import RoyaltyBalance


class RoyaltyRepoPort(Protocol):
    def get_royalty(self, creator: str) -> RoyaltyBalance | None: ...
    def save_royalty(self, balance: RoyaltyBalance) -> None: ...


class PayoutPort(Protocol):
    """Outbound value transfer used for payouts."""

    def transfer(self, amount: int, sender: str, recipient: str) -> TransferResult: ...
