"""Keyed asyncio locks.

Provides one mutual-exclusion lock per string key, created on demand and
discarded once nobody holds or waits for it. Used by the in-memory
repositories to serialize admissions per vote key and refreshes per
(rateable, dimension) pair within a single process.

Usage:
    locks = KeyedLock()

    async with locks.acquire("vote:car:1:alice:speed"):
        ...  # critical section for that key only
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class KeyedLock:
    """A registry of asyncio locks addressed by key."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    @asynccontextmanager
    async def acquire(self, key: str) -> AsyncIterator[None]:
        """Hold the lock for ``key`` for the duration of the block.

        Args:
            key: Lock identifier; different keys never block each other
        """
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def locked(self, key: str) -> bool:
        """Return True if the lock for ``key`` is currently held."""
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        """Number of keys currently held or waited on."""
        return len(self._locks)
