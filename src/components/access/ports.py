from typing import Protocol

from src.core.ports.settlement import TransferResult
from src.domain.entities import ContentItem, PremiumAccessGrant, RoyaltyBalance


class ContentRepoPort(Protocol):
    def get_content(self, content_id: int) -> ContentItem | None: ...


class GrantRepoPort(Protocol):
    def get_grant(self, content_id: int, user: str) -> PremiumAccessGrant | None: ...
    def save_grant(self, grant: PremiumAccessGrant) -> None: ...


class RoyaltyRepoPort(Protocol):
    def get_royalty(self, creator: str) -> RoyaltyBalance | None: ...
    def save_royalty(self, balance: RoyaltyBalance) -> None: ...


class PaymentCapturePort(Protocol):
    """Inbound value transfer used to capture purchase payments."""

    def transfer(self, amount: int, sender: str, recipient: str) -> TransferResult: ...
