"""PostgreSQL implementation of Rateable repository."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from stars.domain.repository import RateableRepository
from stars.domain.value import Dimension, RateableId, RateableRef
from stars.persistence.database import advisory_xact_lock, translate_errors
from stars.persistence.tables import rateables_table, rating_averages_table


class PostgresRateableRepository(RateableRepository):
    """PostgreSQL implementation of RateableRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, rateable: RateableRef) -> RateableRef:
        """Register a rateable entity (no-op if it exists)."""
        stmt = (
            insert(rateables_table)
            .values(
                rateable_type=rateable.rateable_type,
                rateable_id=rateable.rateable_id,
            )
            .on_conflict_do_nothing()
        )
        with translate_errors():
            await self.session.execute(stmt)
            await self.session.flush()
        return rateable

    async def find_ids(self, rateable_type: str) -> List[RateableId]:
        """Find registered rateables of a type."""
        stmt = (
            select(rateables_table.c.rateable_id)
            .where(rateables_table.c.rateable_type == rateable_type)
            .order_by(rateables_table.c.created_at, rateables_table.c.rateable_id)
        )
        with translate_errors():
            result = await self.session.execute(stmt)
        return [RateableId(rid) for rid in result.scalars().all()]

    async def get_cached_average(
        self, rateable: RateableRef, cache_column: str
    ) -> Optional[float]:
        """Read a cached average."""
        stmt = select(rating_averages_table.c.average).where(
            and_(
                rating_averages_table.c.rateable_type == rateable.rateable_type,
                rating_averages_table.c.rateable_id == rateable.rateable_id,
                rating_averages_table.c.cache_column == cache_column,
            )
        )
        with translate_errors():
            result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def set_cached_average(
        self, rateable: RateableRef, cache_column: str, value: float
    ) -> None:
        """Write a cached average (upsert)."""
        await self.save(rateable)
        now = datetime.now()
        stmt = insert(rating_averages_table).values(
            rateable_type=rateable.rateable_type,
            rateable_id=rateable.rateable_id,
            cache_column=cache_column,
            average=value,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[
                rating_averages_table.c.rateable_type,
                rating_averages_table.c.rateable_id,
                rating_averages_table.c.cache_column,
            ],
            set_={"average": value, "updated_at": now},
        )
        with translate_errors():
            await self.session.execute(stmt)
            await self.session.flush()

    @asynccontextmanager
    async def lock_aggregate(
        self, rateable: RateableRef, dimension: Dimension
    ) -> AsyncIterator[None]:
        """Hold an advisory lock on the aggregate until the transaction ends."""
        with translate_errors():
            await advisory_xact_lock(self.session, rateable.aggregate_lock_name(dimension))
        yield
