"""In-memory rateable repository for testing."""

from contextlib import AbstractAsyncContextManager
from typing import Optional

from stars.domain.repository.rateable import RateableRepository
from stars.domain.value import Dimension, RateableId, RateableRef
from stars.persistence.repository.inmemory.unit_of_work import record_undo
from stars.util.locks import KeyedLock


class InMemoryRateableRepository(RateableRepository):
    """In-memory implementation of RateableRepository for testing."""

    def __init__(self, locks: Optional[KeyedLock] = None) -> None:
        # Insertion-ordered; values are the cache fields of each rateable
        self._rateables: dict[RateableRef, dict[str, float]] = {}
        self._locks = locks or KeyedLock()

    async def save(self, rateable: RateableRef) -> RateableRef:
        """Register a rateable entity."""
        if rateable not in self._rateables:
            self._rateables[rateable] = {}
            record_undo(lambda: self._rateables.pop(rateable, None))
        return rateable

    async def find_ids(self, rateable_type: str) -> list[RateableId]:
        """Find registered rateables of a type."""
        return [r.rateable_id for r in self._rateables if r.rateable_type == rateable_type]

    async def get_cached_average(
        self, rateable: RateableRef, cache_column: str
    ) -> Optional[float]:
        """Read a cached average."""
        return self._rateables.get(rateable, {}).get(cache_column)

    async def set_cached_average(
        self, rateable: RateableRef, cache_column: str, value: float
    ) -> None:
        """Write a cached average."""
        await self.save(rateable)
        fields = self._rateables[rateable]
        missing = cache_column not in fields
        previous = fields.get(cache_column)
        fields[cache_column] = value

        def undo() -> None:
            if missing:
                fields.pop(cache_column, None)
            else:
                fields[cache_column] = previous  # type: ignore[assignment]

        record_undo(undo)

    def lock_aggregate(
        self, rateable: RateableRef, dimension: Dimension
    ) -> AbstractAsyncContextManager[None]:
        """Hold the in-process lock for a (rateable, dimension) aggregate."""
        return self._locks.acquire(rateable.aggregate_lock_name(dimension))
