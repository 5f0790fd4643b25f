"""Submit vote use case."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, StrictInt

from stars.application.usecase.base import BaseUseCase
from stars.domain.service import AdmissionService
from stars.domain.value import RateableId, RaterId


class SubmitVoteRequest(BaseModel):
    """Submit vote request."""

    rateable_type: str
    rateable_id: str = Field(min_length=1, max_length=255)
    rater_id: str = Field(min_length=1, max_length=255)
    score: StrictInt  # Range is checked against the rateable type
    dimension: Optional[str] = None


class SubmitVoteResponse(BaseModel):
    """Submit vote response."""

    vote_id: str
    rateable_type: str
    rateable_id: str
    rater_id: str
    dimension: Optional[str]
    score: int
    created: bool
    average: float
    total_votes: int
    updated_at: datetime


class SubmitVoteUseCase(BaseUseCase[SubmitVoteRequest, SubmitVoteResponse]):
    """Use case for casting or changing a star vote."""

    def __init__(self, admission_service: AdmissionService) -> None:
        """Initialize submit vote use case.

        Args:
            admission_service: Vote admission domain service
        """
        self.admission_service = admission_service

    async def execute(self, request: SubmitVoteRequest) -> SubmitVoteResponse:
        """Execute submit vote flow.

        Args:
            request: Submit vote request

        Returns:
            Submit vote response with the refreshed average

        Raises:
            DomainError: If the vote is rejected or cannot be stored
        """
        result = await self.admission_service.submit_vote(
            rateable_id=RateableId(request.rateable_id),
            rateable_type=request.rateable_type,
            rater_id=RaterId(request.rater_id),
            score=request.score,
            dimension=request.dimension,
        )

        return SubmitVoteResponse(
            vote_id=str(result.vote.id),
            rateable_type=result.rateable_type,
            rateable_id=result.rateable_id,
            rater_id=result.vote.rater_id,
            dimension=result.dimension,
            score=result.vote.score,
            created=result.created,
            average=result.average,
            total_votes=result.total_votes,
            updated_at=result.vote.updated_at,
        )
