"""Rateable lookup use cases."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from stars.application.usecase.base import BaseUseCase
from stars.domain.service import QueryService
from stars.domain.value import RaterId


class PopularityOrder(str, Enum):
    """Which end of the ranking to return."""

    MOST = "most"
    LEAST = "least"


class FindRatedWithRequest(BaseModel):
    """Find rateables holding a given raw score."""

    rateable_type: str
    score: int
    dimension: Optional[str] = None


class FindRatedWithResponse(BaseModel):
    """Rateables holding a given raw score."""

    rateable_type: str
    score: int
    dimension: Optional[str]
    rateable_ids: list[str]


class GetPopularRequest(BaseModel):
    """Get most or least popular rateable request."""

    rateable_type: str
    dimension: Optional[str] = None
    order: PopularityOrder = PopularityOrder.MOST


class GetPopularResponse(BaseModel):
    """Most or least popular rateable (None when there are no rateables)."""

    rateable_type: str
    dimension: Optional[str]
    order: PopularityOrder
    rateable_id: Optional[str]


class FindRatedByRequest(BaseModel):
    """Find rateables a rater voted on."""

    rater_id: str
    rateable_type: Optional[str] = None


class RatedItem(BaseModel):
    """A rateable reference in responses."""

    rateable_type: str
    rateable_id: str


class FindRatedByResponse(BaseModel):
    """Rateables a rater voted on, sorted by type then id."""

    rater_id: str
    rateables: list[RatedItem]


class FindRatedWithUseCase(BaseUseCase[FindRatedWithRequest, FindRatedWithResponse]):
    """Use case for listing rateables by raw vote score."""

    def __init__(self, query_service: QueryService) -> None:
        self.query_service = query_service

    async def execute(self, request: FindRatedWithRequest) -> FindRatedWithResponse:
        """Execute find rated with flow."""
        ids = await self.query_service.entities_with_score(
            request.rateable_type, request.score, request.dimension
        )
        return FindRatedWithResponse(
            rateable_type=request.rateable_type,
            score=request.score,
            dimension=request.dimension or None,
            rateable_ids=list(ids),
        )


class GetPopularUseCase(BaseUseCase[GetPopularRequest, GetPopularResponse]):
    """Use case for the most or least popular rateable of a type."""

    def __init__(self, query_service: QueryService) -> None:
        self.query_service = query_service

    async def execute(self, request: GetPopularRequest) -> GetPopularResponse:
        """Execute get popular flow."""
        if request.order == PopularityOrder.MOST:
            rateable_id = await self.query_service.most_popular(
                request.rateable_type, request.dimension
            )
        else:
            rateable_id = await self.query_service.least_popular(
                request.rateable_type, request.dimension
            )
        return GetPopularResponse(
            rateable_type=request.rateable_type,
            dimension=request.dimension or None,
            order=request.order,
            rateable_id=rateable_id,
        )


class FindRatedByUseCase(BaseUseCase[FindRatedByRequest, FindRatedByResponse]):
    """Use case for listing what a rater has voted on."""

    def __init__(self, query_service: QueryService) -> None:
        self.query_service = query_service

    async def execute(self, request: FindRatedByRequest) -> FindRatedByResponse:
        """Execute find rated by flow."""
        refs = await self.query_service.votes_by_rater(
            RaterId(request.rater_id), request.rateable_type
        )
        items = sorted(refs, key=lambda r: (r.rateable_type, r.rateable_id))
        return FindRatedByResponse(
            rater_id=request.rater_id,
            rateables=[
                RatedItem(rateable_type=r.rateable_type, rateable_id=r.rateable_id)
                for r in items
            ],
        )
