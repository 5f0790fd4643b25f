"""Aggregation domain service."""

import math

import logfire

from stars.domain.model.rateable_type import RateableType
from stars.domain.repository import RateableRepository, VoteRepository
from stars.domain.value import (
    Dimension,
    RateableId,
    RateableRef,
    normalize_dimension,
)

from .base import Service
from .registry import RateableRegistry


def guard_average(value: float | None) -> float:
    """Coerce missing or NaN averages to 0.0."""
    if value is None:
        return 0.0
    value = float(value)
    return 0.0 if math.isnan(value) else value


class AggregationService(Service):
    """Domain service maintaining the average score per (rateable, dimension).

    The cached average is the only derived state in the rating domain. It is
    written here and nowhere else, always from a fresh scan of the votes.
    """

    def __init__(
        self,
        registry: RateableRegistry,
        vote_repository: VoteRepository,
        rateable_repository: RateableRepository,
    ) -> None:
        """Initialize aggregation service.

        Args:
            registry: Rateable type registry
            vote_repository: Vote repository
            rateable_repository: Rateable repository holding cache fields
        """
        super().__init__(registry)
        self.vote_repository = vote_repository
        self.rateable_repository = rateable_repository

    async def refresh(
        self, rateable_type: str, rateable_id: RateableId, dimension: Dimension = None
    ) -> float:
        """Recompute the average and persist it when caching is configured.

        Runs under the aggregate lock for the pair, so the stored value
        always reflects a consistent snapshot of committed votes.

        Args:
            rateable_type: Type of the rateable
            rateable_id: ID of the rateable
            dimension: Dimension name, None for the implicit dimension

        Returns:
            The recomputed average (0.0 when there are no votes)

        Raises:
            UnknownRateableTypeError: If the type is not registered
            PersistenceError: If reading votes or writing the cache fails
        """
        dimension = normalize_dimension(dimension)
        config = self.policy(rateable_type)
        rateable = RateableRef(rateable_type=rateable_type, rateable_id=rateable_id)

        with logfire.span(
            "aggregation_service.refresh",
            rateable_type=rateable_type,
            rateable_id=rateable_id,
            dimension=dimension,
        ):
            async with self.rateable_repository.lock_aggregate(rateable, dimension):
                average = await self._compute(config, rateable_id, dimension)

                column = config.cache_column_name(dimension)
                if config.caching_average(dimension) and column:
                    await self.rateable_repository.set_cached_average(
                        rateable, column, average
                    )
                    logfire.info(
                        "Cached average updated",
                        rateable_type=rateable_type,
                        rateable_id=rateable_id,
                        cache_column=column,
                        average=average,
                    )

            return average

    async def current_average(
        self,
        rateable_type: str,
        rateable_id: RateableId,
        dimension: Dimension = None,
        prefer_cache: bool = True,
    ) -> float:
        """Average score for a rateable on one dimension.

        With ``prefer_cache`` and a configured cache field the stored value
        is returned as is, without reading votes. Pass ``prefer_cache=False``
        to force a live computation.

        Args:
            rateable_type: Type of the rateable
            rateable_id: ID of the rateable
            dimension: Dimension name, None for the implicit dimension
            prefer_cache: Whether to trust the cached value

        Returns:
            The average, 0.0 when no votes (or no cached value) exist
        """
        dimension = normalize_dimension(dimension)
        config = self.policy(rateable_type)
        column = config.cache_column_name(dimension)

        if prefer_cache and config.caching_average(dimension) and column:
            rateable = RateableRef(rateable_type=rateable_type, rateable_id=rateable_id)
            cached = await self.rateable_repository.get_cached_average(rateable, column)
            return guard_average(cached)

        return await self._compute(config, rateable_id, dimension)

    async def total_votes(
        self, rateable_type: str, rateable_id: RateableId, dimension: Dimension = None
    ) -> int:
        """Number of votes on a rateable for one dimension."""
        dimension = normalize_dimension(dimension)
        votes = await self.vote_repository.find_by_rateable(
            rateable_type, rateable_id, dimension
        )
        return len(votes)

    async def votes_sum(
        self, rateable_type: str, rateable_id: RateableId, dimension: Dimension = None
    ) -> int:
        """Sum of vote scores on a rateable for one dimension."""
        dimension = normalize_dimension(dimension)
        votes = await self.vote_repository.find_by_rateable(
            rateable_type, rateable_id, dimension
        )
        return sum(v.score for v in votes)

    async def _compute(
        self, config: RateableType, rateable_id: RateableId, dimension: Dimension
    ) -> float:
        votes = await self.vote_repository.find_by_rateable(
            config.name, rateable_id, dimension
        )
        if not votes:
            return 0.0
        return guard_average(sum(v.score for v in votes) / len(votes))
