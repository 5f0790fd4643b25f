"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """A single rating operation exposed to the interface layer.

    Requests and responses are pydantic models so routes can bind them
    directly.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        """Run the use case for one request."""
