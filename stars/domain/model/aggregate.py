"""Aggregate result returned by vote admission."""

from typing import Optional

from stars.domain.model.common import DomainModel
from stars.domain.model.vote import Vote
from stars.domain.value import RateableId


class AggregateResult(DomainModel):
    """Outcome of an admitted vote.

    Carries the committed vote together with the refreshed average for the
    (rateable, dimension) pair it belongs to.
    """

    rateable_type: str
    rateable_id: RateableId
    dimension: Optional[str] = None
    average: float
    total_votes: int
    vote: Vote
    created: bool
