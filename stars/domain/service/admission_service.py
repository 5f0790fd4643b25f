"""Vote admission domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from stars.domain.error import (
    AlreadyRatedError,
    InvalidIdentifierError,
    InvalidScoreError,
    UnknownDimensionError,
)
from stars.domain.model import AggregateResult, Rateable, RateableType, Rater, Vote
from stars.domain.repository import UnitOfWork, VoteRepository
from stars.domain.value import (
    Dimension,
    RateableId,
    RaterId,
    VoteId,
    VoteKey,
    is_valid_dimension_name,
    is_valid_identifier,
    normalize_dimension,
)

from .aggregation_service import AggregationService
from .base import Service
from .registry import RateableRegistry


class AdmissionService(Service):
    """Domain service deciding whether a vote is created, updated or rejected.

    Admission for one vote key is linearizable: lookup, decision and write
    happen under the key lock, and the write plus the cache refresh commit
    together or not at all.
    """

    def __init__(
        self,
        registry: RateableRegistry,
        vote_repository: VoteRepository,
        aggregation_service: AggregationService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize admission service.

        Args:
            registry: Rateable type registry
            vote_repository: Vote repository
            aggregation_service: Aggregation domain service
            unit_of_work: Atomic write boundary
        """
        super().__init__(registry)
        self.vote_repository = vote_repository
        self.aggregation_service = aggregation_service
        self.unit_of_work = unit_of_work

    async def submit_vote(
        self,
        rateable_id: RateableId,
        rateable_type: str,
        rater_id: RaterId,
        score: int,
        dimension: Dimension = None,
    ) -> AggregateResult:
        """Admit a vote and refresh the aggregate.

        Args:
            rateable_id: ID of the rateable
            rateable_type: Type of the rateable
            rater_id: ID of the rater
            score: Submitted score
            dimension: Dimension name, None for the implicit dimension

        Returns:
            The committed vote with the refreshed average

        Raises:
            UnknownRateableTypeError: If the type is not registered
            InvalidScoreError: If score is not an integer in [1, max_score]
            UnknownDimensionError: If dimension is not declared for the type
            InvalidIdentifierError: If rateable_id or rater_id is blank or too long
            AlreadyRatedError: If a vote exists and updates are disallowed
            PersistenceError: If the store fails; nothing is committed
        """
        config = self.policy(rateable_type)
        dimension = normalize_dimension(dimension)
        self._validate(config, score, dimension)
        self._validate_identifiers(rateable_id, rater_id)

        key = VoteKey(
            rateable_type=rateable_type,
            rateable_id=rateable_id,
            rater_id=rater_id,
            dimension=dimension,
        )

        with logfire.span(
            "admission_service.submit_vote",
            rateable_type=rateable_type,
            rateable_id=rateable_id,
            rater_id=rater_id,
            dimension=dimension,
            score=score,
        ):
            async with self.vote_repository.lock(key):
                async with self.unit_of_work.atomic():
                    vote, created = await self._commit(config, key, score)
                    average = await self.aggregation_service.refresh(
                        rateable_type, rateable_id, dimension
                    )
                    total = await self.aggregation_service.total_votes(
                        rateable_type, rateable_id, dimension
                    )

            logfire.info(
                "Vote admitted",
                vote_id=str(vote.id),
                created=created,
                average=average,
                total_votes=total,
            )

            return AggregateResult(
                rateable_type=rateable_type,
                rateable_id=rateable_id,
                dimension=dimension,
                average=average,
                total_votes=total,
                vote=vote,
                created=created,
            )

    async def rate(
        self,
        rateable: Rateable,
        rater: Rater,
        score: int,
        dimension: Dimension = None,
    ) -> AggregateResult:
        """Admit a vote given capability objects instead of raw identifiers."""
        return await self.submit_vote(
            rateable_id=RateableId(rateable.rateable_id),
            rateable_type=rateable.rateable_type,
            rater_id=RaterId(rater.rater_id),
            score=score,
            dimension=dimension,
        )

    async def _commit(
        self, config: RateableType, key: VoteKey, score: int
    ) -> tuple[Vote, bool]:
        """Create or update the vote for a key; caller holds the key lock."""
        existing = await self.vote_repository.find_by_key(key)
        now = datetime.now()

        if existing is None:
            vote = Vote(
                id=VoteId(uuid4()),
                rateable_type=key.rateable_type,
                rateable_id=key.rateable_id,
                rater_id=key.rater_id,
                dimension=key.dimension,
                score=score,
                created_at=now,
                updated_at=now,
            )
            return await self.vote_repository.save(vote), True

        if not config.allow_update:
            logfire.warn(
                "Duplicate vote attempt",
                rateable_type=key.rateable_type,
                rateable_id=key.rateable_id,
                rater_id=key.rater_id,
                dimension=key.dimension,
            )
            raise AlreadyRatedError(
                key.rateable_type, key.rateable_id, key.rater_id, key.dimension
            )

        updated = await self.vote_repository.update_score(existing.id, score, now)
        return updated, False

    def _validate(self, config: RateableType, score: object, dimension: Dimension) -> None:
        # bool is an int subclass but never a valid score
        if (
            isinstance(score, bool)
            or not isinstance(score, int)
            or not 1 <= score <= config.max_score
        ):
            logfire.warn(
                "Invalid score rejected",
                rateable_type=config.name,
                score=repr(score),
                max_score=config.max_score,
            )
            raise InvalidScoreError(score, config.max_score)

        if dimension is not None and (
            not is_valid_dimension_name(dimension)
            or not config.accepts_dimension(dimension)
        ):
            logfire.warn(
                "Unknown dimension rejected",
                rateable_type=config.name,
                dimension=dimension,
            )
            raise UnknownDimensionError(config.name, dimension)

    def _validate_identifiers(self, rateable_id: object, rater_id: object) -> None:
        for field, value in (("rateable_id", rateable_id), ("rater_id", rater_id)):
            if not is_valid_identifier(value):
                logfire.warn("Invalid identifier rejected", field=field, value=repr(value))
                raise InvalidIdentifierError(field, value)
