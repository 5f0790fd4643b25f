"""Rating use cases."""

from .find_rateables import (
    FindRatedByRequest,
    FindRatedByResponse,
    FindRatedByUseCase,
    FindRatedWithRequest,
    FindRatedWithResponse,
    FindRatedWithUseCase,
    GetPopularRequest,
    GetPopularResponse,
    GetPopularUseCase,
    PopularityOrder,
    RatedItem,
)
from .get_rating import GetRatingRequest, GetRatingResponse, GetRatingUseCase
from .submit_vote import SubmitVoteRequest, SubmitVoteResponse, SubmitVoteUseCase

__all__ = [
    "FindRatedByRequest",
    "FindRatedByResponse",
    "FindRatedByUseCase",
    "FindRatedWithRequest",
    "FindRatedWithResponse",
    "FindRatedWithUseCase",
    "GetPopularRequest",
    "GetPopularResponse",
    "GetPopularUseCase",
    "GetRatingRequest",
    "GetRatingResponse",
    "GetRatingUseCase",
    "PopularityOrder",
    "RatedItem",
    "SubmitVoteRequest",
    "SubmitVoteResponse",
    "SubmitVoteUseCase",
]
