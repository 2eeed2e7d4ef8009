"""
Rating aggregator component.
"""

from .component import (
    apply_rating,
    compute_average,
    get_average_rating,
    get_content_rating,
    is_valid_rating,
    load_config_from_rules,
    run,
    run_rate,
)
from .models import RateContentInput, RateContentOutput, RatingConfig
from .ports import ContentRepoPort, GrantRepoPort, RatingRepoPort

__all__ = [
    # Component functions
    "run",
    "run_rate",
    "get_content_rating",
    "get_average_rating",
    "load_config_from_rules",
    # Pure functions
    "apply_rating",
    "compute_average",
    "is_valid_rating",
    # Models
    "RateContentInput",
    "RateContentOutput",
    "RatingConfig",
    # Ports
    "ContentRepoPort",
    "GrantRepoPort",
    "RatingRepoPort",
]
