"""Database connection and session management.

Provides async database engine and session factory for PostgreSQL.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from stars.config import Settings
from stars.domain.error import DuplicateVoteError, PersistenceError


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flushing for better control
        autocommit=False,  # Explicit transaction management
    )


async def advisory_xact_lock(session: AsyncSession, name: str) -> None:
    """Take a transaction-scoped PostgreSQL advisory lock.

    The lock is released when the surrounding transaction ends.

    Args:
        session: Database session
        name: Lock identifier, hashed to a 64-bit key
    """
    stmt = select(func.pg_advisory_xact_lock(func.hashtextextended(name, 0)))
    await session.execute(stmt)


@contextmanager
def translate_errors(duplicate_key: object = None) -> Iterator[None]:
    """Re-raise SQLAlchemy errors as domain persistence errors.

    Args:
        duplicate_key: Vote key reported when a unique constraint fails
    """
    try:
        yield
    except IntegrityError as e:
        if duplicate_key is not None:
            raise DuplicateVoteError(duplicate_key) from e
        raise PersistenceError(str(e.orig or e)) from e
    except SQLAlchemyError as e:
        raise PersistenceError(str(e)) from e
