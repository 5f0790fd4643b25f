"""Test configuration and fixtures."""

from stars.domain.model import RateableType
from stars.domain.service import RateableRegistry


def car_type(**overrides) -> RateableType:
    """Rateable type with three named dimensions and a 10-star scale."""
    options = {
        "name": "car",
        "max_score": 10,
        "dimensions": frozenset({"speed", "reliability", "price"}),
    }
    options.update(overrides)
    return RateableType(**options)


def article_type(**overrides) -> RateableType:
    """Rateable type on a 5-star scale that rejects vote changes."""
    options = {"name": "article", "max_score": 5, "allow_update": False}
    options.update(overrides)
    return RateableType(**options)


def register_types(registry: RateableRegistry, *types: RateableType) -> None:
    """Register the given types, or car and article when none are given."""
    for rateable_type in types or (car_type(), article_type()):
        registry.register(rateable_type)
