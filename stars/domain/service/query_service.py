"""Rating query domain service."""

from typing import Optional

import logfire

from stars.domain.model import Vote
from stars.domain.repository import RateableRepository, VoteRepository
from stars.domain.value import (
    Dimension,
    RateableId,
    RateableRef,
    RaterId,
    VoteKey,
    normalize_dimension,
)

from .aggregation_service import AggregationService
from .base import Service
from .registry import RateableRegistry


class QueryService(Service):
    """Read-side lookups over votes and averages.

    Nothing here writes; cached averages are read, never refreshed.
    """

    def __init__(
        self,
        registry: RateableRegistry,
        vote_repository: VoteRepository,
        rateable_repository: RateableRepository,
        aggregation_service: AggregationService,
    ) -> None:
        """Initialize query service.

        Args:
            registry: Rateable type registry
            vote_repository: Vote repository
            rateable_repository: Rateable repository
            aggregation_service: Aggregation domain service
        """
        super().__init__(registry)
        self.vote_repository = vote_repository
        self.rateable_repository = rateable_repository
        self.aggregation_service = aggregation_service

    async def votes_by_rater(
        self, rater_id: RaterId, rateable_type: Optional[str] = None
    ) -> set[RateableRef]:
        """Rateables the rater has voted on, in any dimension.

        Args:
            rater_id: ID of the rater
            rateable_type: Restrict to one rateable type if given

        Returns:
            Set of rateable references (empty if the rater never voted)
        """
        votes = await self.vote_repository.find_by_rater(rater_id, rateable_type)
        return {
            RateableRef(rateable_type=v.rateable_type, rateable_id=v.rateable_id)
            for v in votes
        }

    async def entities_with_score(
        self, rateable_type: str, score: int, dimension: Dimension = None
    ) -> list[RateableId]:
        """Rateables holding at least one vote with exactly this score.

        Matches raw vote scores, not averages.

        Returns:
            Distinct rateable IDs, lowest identifier first
        """
        votes = await self.vote_repository.find_by_score(
            rateable_type, score, normalize_dimension(dimension)
        )
        return sorted({v.rateable_id for v in votes})

    async def most_popular(
        self, rateable_type: str, dimension: Dimension = None
    ) -> Optional[RateableId]:
        """Rateable with the highest current average.

        Ties go to the lowest identifier.

        Returns:
            The rateable ID, or None if the type has no rateables
        """
        ranked = await self._ranked(rateable_type, dimension)
        if not ranked:
            return None
        best = max(average for _, average in ranked)
        return min(rid for rid, average in ranked if average == best)

    async def least_popular(
        self, rateable_type: str, dimension: Dimension = None
    ) -> Optional[RateableId]:
        """Rateable with the lowest current average.

        Ties go to the lowest identifier.

        Returns:
            The rateable ID, or None if the type has no rateables
        """
        ranked = await self._ranked(rateable_type, dimension)
        if not ranked:
            return None
        worst = min(average for _, average in ranked)
        return min(rid for rid, average in ranked if average == worst)

    async def existing_vote(
        self,
        rateable_id: RateableId,
        rateable_type: str,
        rater_id: RaterId,
        dimension: Dimension = None,
    ) -> Optional[Vote]:
        """The rater's vote on a rateable along one dimension, if any."""
        key = VoteKey(
            rateable_type=rateable_type,
            rateable_id=rateable_id,
            rater_id=rater_id,
            dimension=normalize_dimension(dimension),
        )
        return await self.vote_repository.find_by_key(key)

    async def rated_by(
        self,
        rateable_id: RateableId,
        rateable_type: str,
        rater_id: RaterId,
        dimension: Dimension = None,
    ) -> bool:
        """Return True if the rater has voted on the rateable."""
        vote = await self.existing_vote(rateable_id, rateable_type, rater_id, dimension)
        return vote is not None

    async def can_rate(
        self,
        rateable_id: RateableId,
        rateable_type: str,
        rater_id: RaterId,
        dimension: Dimension = None,
    ) -> bool:
        """Return True if a vote from this rater would be admitted.

        A rater may vote when they have not voted yet, or when the type
        allows updating votes.
        """
        config = self.policy(rateable_type)
        if config.allow_update:
            return True
        return not await self.rated_by(rateable_id, rateable_type, rater_id, dimension)

    async def raters(
        self,
        rateable_type: str,
        rateable_id: RateableId,
        dimension: Dimension = None,
    ) -> list[RaterId]:
        """Distinct raters who voted on a rateable along one dimension."""
        votes = await self.vote_repository.find_by_rateable(
            rateable_type, rateable_id, normalize_dimension(dimension)
        )
        return sorted({v.rater_id for v in votes})

    async def _ranked(
        self, rateable_type: str, dimension: Dimension
    ) -> list[tuple[RateableId, float]]:
        dimension = normalize_dimension(dimension)
        # Validates the type even when there is nothing to rank
        self.policy(rateable_type)

        with logfire.span(
            "query_service.rank", rateable_type=rateable_type, dimension=dimension
        ):
            candidates = dict.fromkeys(
                await self.rateable_repository.find_ids(rateable_type)
            )
            candidates.update(
                dict.fromkeys(await self.vote_repository.find_rateable_ids(rateable_type))
            )

            ranked = []
            for rateable_id in candidates:
                average = await self.aggregation_service.current_average(
                    rateable_type, rateable_id, dimension, prefer_cache=True
                )
                ranked.append((rateable_id, average))
            return ranked
