"""Repository interfaces for the rating domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from stars.domain.repository.rateable import RateableRepository
from stars.domain.repository.unit_of_work import UnitOfWork
from stars.domain.repository.vote import VoteRepository

__all__ = [
    "RateableRepository",
    "UnitOfWork",
    "VoteRepository",
]
