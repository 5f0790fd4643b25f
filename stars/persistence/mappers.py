"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from stars.domain.model import Vote
from stars.domain.value import Dimension, RateableId, RaterId, VoteId

# Column value of the implicit dimension
NO_DIMENSION = ""


def dimension_to_column(dimension: Dimension) -> str:
    """Convert a domain dimension to its column value."""
    return dimension if dimension is not None else NO_DIMENSION


def column_to_dimension(value: Optional[str]) -> Dimension:
    """Convert a column value back to a domain dimension."""
    return value or None


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
        rateable_type=row["rateable_type"],
        rateable_id=RateableId(row["rateable_id"]),
        rater_id=RaterId(row["rater_id"]),
        dimension=column_to_dimension(row.get("dimension")),
        score=row["score"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Args:
        vote: Vote domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = vote.model_dump()
    data["dimension"] = dimension_to_column(vote.dimension)
    return data
