"""In-memory unit of work for testing.

In-memory repositories record an undo action for every write they make
while an atomic block is open. The journal is context-local, so
concurrent tasks each roll back only their own writes.
"""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import Optional

import logfire

from stars.domain.repository.unit_of_work import UnitOfWork

UndoAction = Callable[[], None]

_journal: ContextVar[Optional[list[UndoAction]]] = ContextVar(
    "inmemory_undo_journal", default=None
)


def record_undo(action: UndoAction) -> None:
    """Register an undo action with the enclosing atomic block, if any."""
    journal = _journal.get()
    if journal is not None:
        journal.append(action)


class InMemoryUnitOfWork(UnitOfWork):
    """In-memory implementation of UnitOfWork for testing."""

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """Roll back journaled writes if the block raises."""
        parent = _journal.get()
        journal: list[UndoAction] = []
        token = _journal.set(journal)
        try:
            yield
        except BaseException:
            for action in reversed(journal):
                action()
            if journal:
                logfire.warn("In-memory unit of work rolled back", writes=len(journal))
            raise
        else:
            if parent is not None:
                parent.extend(journal)
        finally:
            _journal.reset(token)
