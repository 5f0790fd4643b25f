"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from stars.config import RatingSettings, Settings
from stars.domain.service import RateableRegistry
from stars.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    The rateable registry is built once per container from those settings.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_rating_settings(self, settings: Settings) -> RatingSettings:
        """Provide rating settings."""
        return settings.rating

    @provide(scope=Scope.APP)
    def provide_registry(self, rating_settings: RatingSettings) -> RateableRegistry:
        """Provide the rateable type registry."""
        return RateableRegistry.from_settings(rating_settings)
