from typing import Protocol

from src.domain.entities import (
    ContentAvgRating,
    ContentItem,
    ContentRating,
    PremiumAccessGrant,
)


class ContentRepoPort(Protocol):
    def get_content(self, content_id: int) -> ContentItem | None: ...


class GrantRepoPort(Protocol):
    def get_grant(self, content_id: int, user: str) -> PremiumAccessGrant | None: ...


class RatingRepoPort(Protocol):
    def get_rating(self, content_id: int, user: str) -> ContentRating | None: ...
    def save_rating(self, rating: ContentRating) -> None: ...
    def get_avg_rating(self, content_id: int) -> ContentAvgRating | None: ...
    def save_avg_rating(self, avg: ContentAvgRating) -> None: ...
