"""Base service class for domain services."""

from stars.domain.model.rateable_type import RateableType

from .registry import RateableRegistry


class Service:
    """Base class for rating domain services.

    Every service resolves rating policy through the injected registry,
    never through global state.
    """

    def __init__(self, registry: RateableRegistry) -> None:
        self.registry = registry

    def policy(self, rateable_type: str) -> RateableType:
        """Rating policy of a rateable type.

        Raises:
            UnknownRateableTypeError: If the type is not registered
        """
        return self.registry.get(rateable_type)
