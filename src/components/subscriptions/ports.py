from typing import Protocol

from src.domain.entities import Subscription


class SubscriptionRepoPort(Protocol):
    def get_subscription(self, subscriber: str) -> Subscription | None: ...
    def save_subscription(self, subscription: Subscription) -> None: ...
