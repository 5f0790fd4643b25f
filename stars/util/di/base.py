"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with swappable (production or in-memory) implementations
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Base for all DI providers.

    A provider base that declares ``__mock_component__`` is a mockable
    component: its subclasses are the production and mock variants,
    told apart by ``__is_mock__``. Providers without a component are
    always used as-is.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def is_mockable(cls) -> bool:
        """Return True if this provider has mock and production variants."""
        return cls.__mock_component__ is not None and bool(cls.__subclasses__())
