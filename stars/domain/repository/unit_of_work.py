"""Unit of work interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """Groups repository writes into one all-or-nothing step.

    Used by vote admission so that a vote write and the cache refresh that
    follows it either both land or neither does.
    """

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic block.

        Writes made through the repositories inside the block are rolled
        back if the block exits with an exception; the exception then
        propagates unchanged.
        """
        pass
