"""Rateable type registry."""

from typing import Iterator

import logfire

from stars.config import RatingSettings
from stars.domain.error import UnknownRateableTypeError
from stars.domain.model.rateable_type import RateableType
from stars.util.error import ConfigurationError


class RateableRegistry:
    """Holds the rating policy of every rateable type.

    Types are registered once at startup and read by the admission and
    aggregation services; entries themselves are immutable.
    """

    def __init__(self) -> None:
        self._types: dict[str, RateableType] = {}

    @classmethod
    def from_settings(cls, settings: RatingSettings) -> "RateableRegistry":
        """Build a registry from rating settings.

        Args:
            settings: Rating configuration with per-type options

        Returns:
            Registry holding one entry per configured type
        """
        registry = cls()
        for name, options in settings.rateable_types.items():
            cache_column = (
                options.cache_column
                if options.cache_column is not None
                else settings.default_cache_column
            )
            registry.register(
                RateableType(
                    name=name,
                    max_score=options.max_score or settings.default_max_score,
                    allow_update=(
                        options.allow_update
                        if options.allow_update is not None
                        else settings.default_allow_update
                    ),
                    cache_column=cache_column or None,
                    dimensions=frozenset(options.dimensions),
                )
            )
        return registry

    def register(self, rateable_type: RateableType) -> RateableType:
        """Register a rateable type.

        Raises:
            ConfigurationError: If the type is already registered
        """
        if rateable_type.name in self._types:
            raise ConfigurationError(
                f"Rateable type already registered: {rateable_type.name}",
                rateable_type=rateable_type.name,
            )
        self._types[rateable_type.name] = rateable_type
        logfire.info(
            "Rateable type registered",
            rateable_type=rateable_type.name,
            max_score=rateable_type.max_score,
            allow_update=rateable_type.allow_update,
            cache_column=rateable_type.cache_column,
            dimensions=sorted(rateable_type.dimensions),
        )
        return rateable_type

    def replace(self, rateable_type: RateableType) -> RateableType:
        """Register a type, overwriting any existing entry."""
        self._types.pop(rateable_type.name, None)
        return self.register(rateable_type)

    def unregister(self, name: str) -> None:
        """Remove a type if present."""
        self._types.pop(name, None)

    def get(self, name: str) -> RateableType:
        """Get the policy for a type.

        Raises:
            UnknownRateableTypeError: If the type is not registered
        """
        try:
            return self._types[name]
        except KeyError:
            raise UnknownRateableTypeError(name) from None

    def names(self) -> list[str]:
        """Names of all registered types."""
        return list(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[RateableType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)
