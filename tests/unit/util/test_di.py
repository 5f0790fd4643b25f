"""Unit tests for provider selection."""

import pytest

from stars.util.di import (
    PersistenceProvider,
    ProdConfigProvider,
    ProviderBase,
    get_provider,
)
from stars.util.di.infrastructure import ProdPersistenceProvider
from stars.util.error import DependencyInjectionError
from tests.di import MockPersistenceProvider, build_test_container


class TestGetProvider:
    """Tests for get_provider."""

    def test_concrete_provider_is_used_as_is(self):
        """Providers without a component should never be swapped."""
        assert not ProdConfigProvider.is_mockable()
        assert get_provider(ProdConfigProvider, use_mock=True) is ProdConfigProvider

    def test_mockable_component_selects_variant(self):
        """Persistence should resolve to the production or in-memory variant."""
        assert PersistenceProvider.is_mockable()
        assert get_provider(PersistenceProvider) is ProdPersistenceProvider
        mock = get_provider(PersistenceProvider, use_mock=True)
        assert mock is MockPersistenceProvider

    def test_missing_variant_raises(self):
        """A component without the requested variant should fail."""

        class SearchProvider(ProviderBase):
            __mock_component__ = "search"

        class ProdSearchProvider(SearchProvider):
            __is_mock__ = False

        with pytest.raises(DependencyInjectionError, match="No mock implementation"):
            get_provider(SearchProvider, use_mock=True)


class TestBuildTestContainer:
    """Tests for the test container builder."""

    def test_unknown_component_rejected(self):
        """Unmocking an unknown component should fail fast."""
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"search"})
