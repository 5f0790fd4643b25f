"""Domain value objects for ratings.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from typing import NamedTuple, Optional

from pydantic import field_validator

from stars.domain.value.common import ValueObject
from stars.domain.value.identifiers import RateableId, RaterId

# A dimension is a plain name; None stands for the implicit dimension.
Dimension = Optional[str]

_DIMENSION_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def normalize_dimension(dimension: Dimension) -> Dimension:
    """Normalize a dimension name.

    Blank names collapse to the implicit dimension (None).

    Args:
        dimension: Raw dimension name or None

    Returns:
        Stripped dimension name, or None for the implicit dimension
    """
    if dimension is None:
        return None
    name = str(dimension).strip()
    return name or None


def is_valid_identifier(value: object) -> bool:
    """Check that an external identifier is a non-blank string of at most 255 characters."""
    return isinstance(value, str) and bool(value.strip()) and len(value) <= 255


def is_valid_dimension_name(name: str) -> bool:
    """Check that a dimension name is usable as a column suffix."""
    return bool(_DIMENSION_PATTERN.match(name))


def underscore(name: str) -> str:
    """Convert a dimension name to snake_case (``camelCase`` -> ``camel_case``)."""
    return _CAMEL_BOUNDARY.sub("_", name).replace("-", "_").lower()


class VoteKey(NamedTuple):
    """Uniqueness key of a vote: one vote per rater, rateable and dimension."""

    rateable_type: str
    rateable_id: RateableId
    rater_id: RaterId
    dimension: Dimension

    def lock_name(self) -> str:
        """Stable textual form used for lock identifiers."""
        return "vote:{}:{}:{}:{}".format(
            self.rateable_type, self.rateable_id, self.rater_id, self.dimension or ""
        )


class RateableRef(ValueObject):
    """Reference to an external rateable entity.

    Satisfies the Rateable capability protocol.
    """

    rateable_type: str
    rateable_id: RateableId

    @field_validator("rateable_type", "rateable_id")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Validate identifiers are non-empty."""
        if not is_valid_identifier(v):
            raise ValueError("Rateable identifiers must be 1-255 characters")
        return v

    def aggregate_lock_name(self, dimension: Dimension) -> str:
        """Lock identifier for the (rateable, dimension) aggregate."""
        return f"aggregate:{self.rateable_type}:{self.rateable_id}:{dimension or ''}"


class RaterRef(ValueObject):
    """Reference to an external rater identity.

    Satisfies the Rater capability protocol.
    """

    rater_id: RaterId

    @field_validator("rater_id")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Validate rater id is non-empty."""
        if not is_valid_identifier(v):
            raise ValueError("Rater id must be 1-255 characters")
        return v
