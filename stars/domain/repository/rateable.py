"""Rateable repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import List, Optional

from stars.domain.value import Dimension, RateableId, RateableRef


class RateableRepository(ABC):
    """Repository for rateable entity records.

    Tracks which rateables of a type exist and stores their cached
    averages, one named cache field per dimension.
    """

    @abstractmethod
    async def save(self, rateable: RateableRef) -> RateableRef:
        """Register a rateable entity (idempotent).

        Args:
            rateable: The rateable reference

        Returns:
            The saved reference
        """
        pass

    @abstractmethod
    async def find_ids(self, rateable_type: str) -> List[RateableId]:
        """Find all registered rateables of a type.

        Args:
            rateable_type: Type of the rateables

        Returns:
            Rateable IDs in registration order
        """
        pass

    @abstractmethod
    async def get_cached_average(
        self, rateable: RateableRef, cache_column: str
    ) -> Optional[float]:
        """Read a cached average.

        Args:
            rateable: The rateable reference
            cache_column: Name of the cache field

        Returns:
            The stored value, or None if never written
        """
        pass

    @abstractmethod
    async def set_cached_average(
        self, rateable: RateableRef, cache_column: str, value: float
    ) -> None:
        """Write a cached average, registering the rateable if needed.

        Args:
            rateable: The rateable reference
            cache_column: Name of the cache field
            value: Average to store

        Raises:
            PersistenceError: If the write fails
        """
        pass

    @abstractmethod
    def lock_aggregate(
        self, rateable: RateableRef, dimension: Dimension
    ) -> AbstractAsyncContextManager[None]:
        """Serialize aggregate refreshes for one (rateable, dimension) pair.

        Args:
            rateable: The rateable reference
            dimension: Dimension name, None for the implicit dimension

        Returns:
            Async context manager holding the aggregate lock
        """
        pass
