"""In-memory repository implementations for testing."""

from .rateable import InMemoryRateableRepository
from .unit_of_work import InMemoryUnitOfWork
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryRateableRepository",
    "InMemoryUnitOfWork",
    "InMemoryVoteRepository",
]
