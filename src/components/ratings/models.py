"""
Rating aggregator component models.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.domain.entities import ContentAvgRating, ContentRating


@dataclass(frozen=True)
class RateContentInput:
    """Input for rating a purchased content item."""

    content_id: int
    rating: int


@dataclass(frozen=True)
class RateContentOutput:
    """The caller's rating record and the aggregate after the update."""

    rating: ContentRating
    aggregate: ContentAvgRating


@dataclass(frozen=True)
class RatingConfig:
    min_rating: int = 1
    max_rating: int = 5
