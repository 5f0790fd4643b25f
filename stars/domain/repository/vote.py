"""Vote repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import datetime
from typing import List, Optional

from stars.domain.model.vote import Vote
from stars.domain.value import Dimension, RateableId, RaterId, VoteId, VoteKey


class VoteRepository(ABC):
    """Repository for Vote entity (the vote store).

    Defines the contract for vote persistence operations. Owns no policy:
    admission rules live in the domain services. Implementations live in
    the infrastructure layer.
    """

    @abstractmethod
    async def find_by_key(self, key: VoteKey) -> Optional[Vote]:
        """Find a rater's vote on a rateable along one dimension.

        Args:
            key: Vote uniqueness key

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_rateable(
        self,
        rateable_type: str,
        rateable_id: RateableId,
        dimension: Dimension = None,
    ) -> List[Vote]:
        """Find all votes on a rateable for one dimension.

        Args:
            rateable_type: Type of the rateable
            rateable_id: ID of the rateable
            dimension: Dimension name, None for the implicit dimension

        Returns:
            List of votes on the rateable for that dimension only
        """
        pass

    @abstractmethod
    async def find_by_rater(
        self, rater_id: RaterId, rateable_type: Optional[str] = None
    ) -> List[Vote]:
        """Find all votes cast by a rater, across dimensions.

        Args:
            rater_id: The rater's ID
            rateable_type: Restrict to one rateable type if given

        Returns:
            List of votes by the rater
        """
        pass

    @abstractmethod
    async def find_by_score(
        self, rateable_type: str, score: int, dimension: Dimension = None
    ) -> List[Vote]:
        """Find votes of a type carrying an exact score on one dimension.

        Args:
            rateable_type: Type of the rateables
            score: Exact score to match
            dimension: Dimension name, None for the implicit dimension

        Returns:
            List of matching votes
        """
        pass

    @abstractmethod
    async def find_rateable_ids(self, rateable_type: str) -> List[RateableId]:
        """Find the distinct rateables of a type that hold any vote.

        Args:
            rateable_type: Type of the rateables

        Returns:
            Distinct rateable IDs
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create).

        Args:
            vote: The vote to save

        Returns:
            The saved vote

        Raises:
            DuplicateVoteError: If a vote already exists for the vote key
            PersistenceError: If the store cannot complete the write
        """
        pass

    @abstractmethod
    async def update_score(
        self, vote_id: VoteId, score: int, updated_at: datetime
    ) -> Vote:
        """Overwrite the score of an existing vote.

        Args:
            vote_id: The vote ID to update
            score: New score
            updated_at: Timestamp of the change

        Returns:
            The updated vote

        Raises:
            PersistenceError: If the vote is missing or the write fails
        """
        pass

    @abstractmethod
    def lock(self, key: VoteKey) -> AbstractAsyncContextManager[None]:
        """Serialize admissions for one vote key.

        While the returned context is held, no other admission for the same
        key can observe or write the vote.

        Args:
            key: Vote uniqueness key

        Returns:
            Async context manager holding the key lock
        """
        pass
