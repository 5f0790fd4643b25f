"""Rating routes."""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query
from pydantic import BaseModel, StrictInt

from stars.application.usecase.rating import (
    FindRatedByRequest,
    FindRatedByResponse,
    FindRatedByUseCase,
    FindRatedWithRequest,
    FindRatedWithResponse,
    FindRatedWithUseCase,
    GetPopularRequest,
    GetPopularResponse,
    GetPopularUseCase,
    GetRatingRequest,
    GetRatingResponse,
    GetRatingUseCase,
    PopularityOrder,
    SubmitVoteRequest,
    SubmitVoteResponse,
    SubmitVoteUseCase,
)

router = APIRouter(tags=["ratings"], route_class=DishkaRoute)


class VoteBody(BaseModel):
    """Body of a vote submission."""

    rater_id: str
    score: StrictInt
    dimension: Optional[str] = None


@router.post(
    "/rateables/{rateable_type}/{rateable_id}/votes",
    response_model=SubmitVoteResponse,
)
async def submit_vote(
    rateable_type: str,
    rateable_id: str,
    body: VoteBody,
    submit_vote_use_case: FromDishka[SubmitVoteUseCase],
) -> SubmitVoteResponse:
    """Cast or change a vote.

    Domain errors are rendered by the application's error handlers:
    422 for an invalid score or dimension, 409 when already rated,
    404 for an unknown rateable type.

    Args:
        rateable_type: Rateable type name
        rateable_id: Rateable ID
        body: Rater, score and optional dimension
        submit_vote_use_case: Submit vote use case from DI

    Returns:
        The committed vote and refreshed average
    """
    request = SubmitVoteRequest(
        rateable_type=rateable_type,
        rateable_id=rateable_id,
        rater_id=body.rater_id,
        score=body.score,
        dimension=body.dimension,
    )
    return await submit_vote_use_case.execute(request)


@router.get(
    "/rateables/{rateable_type}/{rateable_id}/rating",
    response_model=GetRatingResponse,
)
async def get_rating(
    rateable_type: str,
    rateable_id: str,
    get_rating_use_case: FromDishka[GetRatingUseCase],
    dimension: Optional[str] = Query(default=None),
    rater_id: Optional[str] = Query(default=None),
    live: bool = Query(default=False),
) -> GetRatingResponse:
    """Get the rating summary of a rateable.

    Args:
        rateable_type: Rateable type name
        rateable_id: Rateable ID
        get_rating_use_case: Get rating use case from DI
        dimension: Dimension name, omitted for the implicit dimension
        rater_id: Current rater, to include their vote
        live: Recompute the average instead of reading the cache

    Returns:
        Average, vote count and the rater's vote
    """
    request = GetRatingRequest(
        rateable_type=rateable_type,
        rateable_id=rateable_id,
        dimension=dimension,
        rater_id=rater_id,
        live=live,
    )
    return await get_rating_use_case.execute(request)


@router.get("/rateables/{rateable_type}/popular", response_model=GetPopularResponse)
async def get_popular(
    rateable_type: str,
    get_popular_use_case: FromDishka[GetPopularUseCase],
    dimension: Optional[str] = Query(default=None),
    order: PopularityOrder = Query(default=PopularityOrder.MOST),
) -> GetPopularResponse:
    """Get the most or least popular rateable of a type."""
    request = GetPopularRequest(
        rateable_type=rateable_type, dimension=dimension, order=order
    )
    return await get_popular_use_case.execute(request)


@router.get("/rateables/{rateable_type}", response_model=FindRatedWithResponse)
async def find_rated_with(
    rateable_type: str,
    find_rated_with_use_case: FromDishka[FindRatedWithUseCase],
    score: int = Query(ge=1),
    dimension: Optional[str] = Query(default=None),
) -> FindRatedWithResponse:
    """List rateables holding a vote with exactly this score."""
    request = FindRatedWithRequest(
        rateable_type=rateable_type, score=score, dimension=dimension
    )
    return await find_rated_with_use_case.execute(request)


@router.get("/raters/{rater_id}/rateables", response_model=FindRatedByResponse)
async def find_rated_by(
    rater_id: str,
    find_rated_by_use_case: FromDishka[FindRatedByUseCase],
    rateable_type: Optional[str] = Query(default=None),
) -> FindRatedByResponse:
    """List rateables a rater has voted on."""
    request = FindRatedByRequest(rater_id=rater_id, rateable_type=rateable_type)
    return await find_rated_by_use_case.execute(request)
