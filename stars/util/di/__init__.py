"""Dependency injection module."""

from typing import Type

from stars.util.di.application import ProdApplicationProvider
from stars.util.di.base import Component, ProviderBase
from stars.util.di.core import ProdConfigProvider
from stars.util.di.domain import ProdDomainProvider
from stars.util.di.infrastructure import PersistenceProvider, ProdPersistenceProvider
from stars.util.error import DependencyInjectionError

# Order matters only for readability; dishka resolves by type
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Select the provider class to instantiate for a base.

    Args:
        base: Provider base class from PROVIDERS
        use_mock: Whether to pick the in-memory variant of a mockable component

    Returns:
        Provider class (not instantiated)

    Raises:
        DependencyInjectionError: If the requested variant does not exist
    """
    if not base.is_mockable():
        return base

    impl = next(
        (c for c in base.__subclasses__() if c.__is_mock__ == use_mock),
        None,
    )
    if impl is None:
        component = base.__mock_component__ or base.__name__
        raise DependencyInjectionError(component, use_mock)

    return impl


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
