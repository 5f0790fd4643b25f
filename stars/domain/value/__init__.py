"""Domain value objects for ratings."""

from stars.domain.value.identifiers import RateableId, RaterId, VoteId
from stars.domain.value.types import (
    Dimension,
    RateableRef,
    RaterRef,
    VoteKey,
    is_valid_dimension_name,
    is_valid_identifier,
    normalize_dimension,
    underscore,
)

__all__ = [
    # Identifiers
    "VoteId",
    "RateableId",
    "RaterId",
    # Types
    "Dimension",
    "RateableRef",
    "RaterRef",
    "VoteKey",
    "is_valid_dimension_name",
    "is_valid_identifier",
    "normalize_dimension",
    "underscore",
]
