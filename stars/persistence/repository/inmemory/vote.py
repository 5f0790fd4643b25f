"""In-memory vote repository for testing."""

from contextlib import AbstractAsyncContextManager
from datetime import datetime
from typing import Optional

from stars.domain.error import DuplicateVoteError, PersistenceError
from stars.domain.model.vote import Vote
from stars.domain.repository.vote import VoteRepository
from stars.domain.value import Dimension, RateableId, RaterId, VoteId, VoteKey
from stars.persistence.repository.inmemory.unit_of_work import record_undo
from stars.util.locks import KeyedLock


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, locks: Optional[KeyedLock] = None) -> None:
        self._votes: dict[VoteId, Vote] = {}
        self._locks = locks or KeyedLock()

    async def find_by_key(self, key: VoteKey) -> Optional[Vote]:
        """Find a vote by its uniqueness key."""
        for vote in self._votes.values():
            if vote.key == key:
                return vote
        return None

    async def find_by_rateable(
        self,
        rateable_type: str,
        rateable_id: RateableId,
        dimension: Dimension = None,
    ) -> list[Vote]:
        """Find all votes on a rateable for one dimension."""
        return [
            v
            for v in self._votes.values()
            if v.rateable_type == rateable_type
            and v.rateable_id == rateable_id
            and v.dimension == dimension
        ]

    async def find_by_rater(
        self, rater_id: RaterId, rateable_type: Optional[str] = None
    ) -> list[Vote]:
        """Find all votes by a rater."""
        return [
            v
            for v in self._votes.values()
            if v.rater_id == rater_id
            and (rateable_type is None or v.rateable_type == rateable_type)
        ]

    async def find_by_score(
        self, rateable_type: str, score: int, dimension: Dimension = None
    ) -> list[Vote]:
        """Find votes carrying an exact score."""
        return [
            v
            for v in self._votes.values()
            if v.rateable_type == rateable_type
            and v.score == score
            and v.dimension == dimension
        ]

    async def find_rateable_ids(self, rateable_type: str) -> list[RateableId]:
        """Find distinct rateables of a type holding any vote."""
        seen: dict[RateableId, None] = {}
        for vote in self._votes.values():
            if vote.rateable_type == rateable_type:
                seen.setdefault(vote.rateable_id, None)
        return list(seen)

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            DuplicateVoteError: If vote already exists (duplicate)
        """
        if await self.find_by_key(vote.key):
            raise DuplicateVoteError(vote.key)

        self._votes[vote.id] = vote
        record_undo(lambda: self._votes.pop(vote.id, None))
        return vote

    async def update_score(
        self, vote_id: VoteId, score: int, updated_at: datetime
    ) -> Vote:
        """Overwrite the score of a vote."""
        previous = self._votes.get(vote_id)
        if previous is None:
            raise PersistenceError(f"Vote not found: {vote_id}")

        updated = previous.with_score(score, updated_at)
        self._votes[vote_id] = updated
        record_undo(lambda: self._votes.__setitem__(vote_id, previous))
        return updated

    def lock(self, key: VoteKey) -> AbstractAsyncContextManager[None]:
        """Hold the in-process lock for a vote key."""
        return self._locks.acquire(key.lock_name())

    def count(self) -> int:
        """Total number of stored votes."""
        return len(self._votes)
