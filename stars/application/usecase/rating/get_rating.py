"""Get rating use case."""

from typing import Optional

from pydantic import BaseModel

from stars.application.usecase.base import BaseUseCase
from stars.domain.service import AggregationService, QueryService, RateableRegistry
from stars.domain.value import RateableId, RaterId, normalize_dimension


class GetRatingRequest(BaseModel):
    """Get rating request."""

    rateable_type: str
    rateable_id: str
    dimension: Optional[str] = None
    rater_id: Optional[str] = None  # Current rater, for display only
    live: bool = False  # Bypass the cached average


class GetRatingResponse(BaseModel):
    """Get rating response."""

    rateable_type: str
    rateable_id: str
    dimension: Optional[str]
    max_score: int
    average: float
    total_votes: int
    rater_score: Optional[int] = None
    can_rate: Optional[bool] = None


class GetRatingUseCase(BaseUseCase[GetRatingRequest, GetRatingResponse]):
    """Use case for reading the rating summary of a rateable."""

    def __init__(
        self,
        registry: RateableRegistry,
        aggregation_service: AggregationService,
        query_service: QueryService,
    ) -> None:
        """Initialize get rating use case.

        Args:
            registry: Rateable type registry
            aggregation_service: Aggregation domain service
            query_service: Query domain service
        """
        self.registry = registry
        self.aggregation_service = aggregation_service
        self.query_service = query_service

    async def execute(self, request: GetRatingRequest) -> GetRatingResponse:
        """Execute get rating flow.

        Args:
            request: Get rating request

        Returns:
            Average, vote count and, when a rater is given, their vote

        Raises:
            UnknownRateableTypeError: If the type is not registered
        """
        config = self.registry.get(request.rateable_type)
        rateable_id = RateableId(request.rateable_id)
        dimension = normalize_dimension(request.dimension)

        average = await self.aggregation_service.current_average(
            request.rateable_type, rateable_id, dimension, prefer_cache=not request.live
        )
        total = await self.aggregation_service.total_votes(
            request.rateable_type, rateable_id, dimension
        )

        rater_score = None
        can_rate = None
        if request.rater_id:
            rater_id = RaterId(request.rater_id)
            vote = await self.query_service.existing_vote(
                rateable_id, request.rateable_type, rater_id, dimension
            )
            rater_score = vote.score if vote else None
            can_rate = await self.query_service.can_rate(
                rateable_id, request.rateable_type, rater_id, dimension
            )

        return GetRatingResponse(
            rateable_type=request.rateable_type,
            rateable_id=request.rateable_id,
            dimension=dimension,
            max_score=config.max_score,
            average=average,
            total_votes=total,
            rater_score=rater_score,
            can_rate=can_rate,
        )
