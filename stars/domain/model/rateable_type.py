"""Rateable type configuration.

A rateable type is a logical category of entity (article, car, ...) that
can receive votes. Its configuration is fixed once it is registered.
"""

from typing import Optional

from pydantic import Field, field_validator

from stars.domain.model.common import DomainModel
from stars.domain.value import Dimension, is_valid_dimension_name, underscore


class RateableType(DomainModel):
    """Per-type rating policy.

    Attributes:
        name: Type name, used as the rateable_type of votes
        max_score: Highest score a vote may carry
        allow_update: Whether a second vote from the same rater overwrites
            the first instead of being rejected
        cache_column: Base name of the cached average field; None disables
            caching for every dimension
        dimensions: Declared named dimensions; the implicit dimension is
            always available
    """

    name: str = Field(min_length=1, max_length=255)
    max_score: int = Field(default=5, ge=1)
    allow_update: bool = True
    cache_column: Optional[str] = "rating_average"
    dimensions: frozenset[str] = frozenset()

    @field_validator("dimensions")
    @classmethod
    def validate_dimensions(cls, v: frozenset[str]) -> frozenset[str]:
        """Validate declared dimension names.

        Names that map to the same cache field (``topSpeed`` and
        ``top_speed``) are rejected, since their averages would overwrite
        each other.
        """
        seen: dict[str, str] = {}
        for name in sorted(v):
            if not is_valid_dimension_name(name):
                raise ValueError(f"Invalid dimension name: {name!r}")
            field = underscore(name)
            if field in seen:
                raise ValueError(
                    f"Dimensions {seen[field]!r} and {name!r} share cache field suffix {field!r}"
                )
            seen[field] = name
        return v

    @field_validator("cache_column")
    @classmethod
    def validate_cache_column(cls, v: Optional[str]) -> Optional[str]:
        """Blank cache column means no caching."""
        if v is None or not v.strip():
            return None
        if not is_valid_dimension_name(v):
            raise ValueError(f"Invalid cache column name: {v!r}")
        return v

    def accepts_dimension(self, dimension: Dimension) -> bool:
        """Return True if votes may be cast on this dimension."""
        return dimension is None or dimension in self.dimensions

    def caching_average(self, dimension: Dimension = None) -> bool:
        """Return True if the average for this dimension is cached."""
        return self.cache_column is not None

    def cache_column_name(self, dimension: Dimension = None) -> Optional[str]:
        """Name of the cache field for a dimension.

        ``rating_average`` for the implicit dimension,
        ``rating_average_<dimension>`` otherwise.
        """
        if self.cache_column is None:
            return None
        if dimension is None:
            return self.cache_column
        return f"{self.cache_column}_{underscore(dimension)}"
