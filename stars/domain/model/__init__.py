"""Domain model entities for ratings."""

from stars.domain.model.aggregate import AggregateResult
from stars.domain.model.capability import Rateable, Rater
from stars.domain.model.rateable_type import RateableType
from stars.domain.model.vote import Vote

__all__ = [
    "AggregateResult",
    "Rateable",
    "RateableType",
    "Rater",
    "Vote",
]
