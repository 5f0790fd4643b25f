"""PostgreSQL implementation of Vote repository."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from stars.domain.error import PersistenceError
from stars.domain.model import Vote
from stars.domain.repository import VoteRepository
from stars.domain.value import Dimension, RateableId, RaterId, VoteId, VoteKey
from stars.persistence.database import advisory_xact_lock, translate_errors
from stars.persistence.mappers import dimension_to_column, row_to_vote, vote_to_dict
from stars.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_key(self, key: VoteKey) -> Optional[Vote]:
        """Find a vote by its uniqueness key."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.rateable_type == key.rateable_type,
                votes_table.c.rateable_id == key.rateable_id,
                votes_table.c.rater_id == key.rater_id,
                votes_table.c.dimension == dimension_to_column(key.dimension),
            )
        )
        with translate_errors():
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_vote(dict(row)) if row else None

    async def find_by_rateable(
        self,
        rateable_type: str,
        rateable_id: RateableId,
        dimension: Dimension = None,
    ) -> List[Vote]:
        """Find all votes on a rateable for one dimension."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.rateable_type == rateable_type,
                votes_table.c.rateable_id == rateable_id,
                votes_table.c.dimension == dimension_to_column(dimension),
            )
        )
        with translate_errors():
            result = await self.session.execute(stmt)
        return [row_to_vote(dict(row)) for row in result.mappings().all()]

    async def find_by_rater(
        self, rater_id: RaterId, rateable_type: Optional[str] = None
    ) -> List[Vote]:
        """Find all votes by a rater."""
        stmt = select(votes_table).where(votes_table.c.rater_id == rater_id)
        if rateable_type is not None:
            stmt = stmt.where(votes_table.c.rateable_type == rateable_type)
        with translate_errors():
            result = await self.session.execute(stmt)
        return [row_to_vote(dict(row)) for row in result.mappings().all()]

    async def find_by_score(
        self, rateable_type: str, score: int, dimension: Dimension = None
    ) -> List[Vote]:
        """Find votes carrying an exact score."""
        stmt = (
            select(votes_table)
            .where(
                and_(
                    votes_table.c.rateable_type == rateable_type,
                    votes_table.c.score == score,
                    votes_table.c.dimension == dimension_to_column(dimension),
                )
            )
            .order_by(votes_table.c.rateable_id)
        )
        with translate_errors():
            result = await self.session.execute(stmt)
        return [row_to_vote(dict(row)) for row in result.mappings().all()]

    async def find_rateable_ids(self, rateable_type: str) -> List[RateableId]:
        """Find distinct rateables of a type holding any vote."""
        stmt = (
            select(votes_table.c.rateable_id)
            .where(votes_table.c.rateable_type == rateable_type)
            .distinct()
            .order_by(votes_table.c.rateable_id)
        )
        with translate_errors():
            result = await self.session.execute(stmt)
        return [RateableId(rid) for rid in result.scalars().all()]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create)."""
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        with translate_errors(duplicate_key=vote.key):
            await self.session.execute(stmt)
            await self.session.flush()
        return vote

    async def update_score(
        self, vote_id: VoteId, score: int, updated_at: datetime
    ) -> Vote:
        """Overwrite the score of a vote."""
        stmt = (
            update(votes_table)
            .where(votes_table.c.id == vote_id)
            .values(score=score, updated_at=updated_at)
            .returning(votes_table)
        )
        with translate_errors():
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            await self.session.flush()
        if row is None:
            raise PersistenceError(f"Vote not found: {vote_id}")
        return row_to_vote(dict(row))

    @asynccontextmanager
    async def lock(self, key: VoteKey) -> AsyncIterator[None]:
        """Hold an advisory lock on the vote key until the transaction ends."""
        with translate_errors():
            await advisory_xact_lock(self.session, key.lock_name())
        yield
