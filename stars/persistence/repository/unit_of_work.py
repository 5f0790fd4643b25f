"""PostgreSQL implementation of UnitOfWork."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from stars.domain.repository import UnitOfWork


class PostgresUnitOfWork(UnitOfWork):
    """Atomic blocks backed by SAVEPOINTs on the request session.

    The request-scoped session commits once the request finishes; a failed
    block only rolls back to its savepoint.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize unit of work with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """Run the block inside a SAVEPOINT."""
        try:
            async with self.session.begin_nested():
                yield
        except Exception as e:
            logfire.warn("Savepoint rolled back", error=str(e))
            raise
