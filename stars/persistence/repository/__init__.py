"""PostgreSQL repository implementations."""

from stars.persistence.repository.rateable import PostgresRateableRepository
from stars.persistence.repository.unit_of_work import PostgresUnitOfWork
from stars.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresRateableRepository",
    "PostgresUnitOfWork",
    "PostgresVoteRepository",
]
