"""Vote entity.

Votes are discrete star scores cast by a rater on a rateable entity,
optionally along a named dimension. Each rater can hold one vote per
rateable and dimension.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from stars.domain.model.common import DomainModel
from stars.domain.value import RateableId, RaterId, VoteId, VoteKey


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per (rateable, rater, dimension); enforced by the admission
      protocol with a database unique constraint as backstop
    - Score is bounded by the rateable type's maximum at admission time
    - Polymorphic reference to the rateable (type + id)
    """

    id: VoteId
    rateable_type: str
    rateable_id: RateableId
    rater_id: RaterId
    dimension: Optional[str] = None
    score: int = Field(ge=1)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def key(self) -> VoteKey:
        """Uniqueness key of this vote."""
        return VoteKey(
            rateable_type=self.rateable_type,
            rateable_id=self.rateable_id,
            rater_id=self.rater_id,
            dimension=self.dimension,
        )

    def with_score(self, score: int, updated_at: datetime) -> "Vote":
        """Return a copy of this vote carrying a new score."""
        return self.evolve(score=score, updated_at=updated_at)
