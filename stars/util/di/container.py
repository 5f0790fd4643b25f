"""Dependency injection container."""

from dishka import AsyncContainer, Provider, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI
import logfire

from stars.util.di import PROVIDERS, get_provider


def create_container(*extra: Provider) -> AsyncContainer:
    """Build the production container.

    Settings, and with them the rateable type registry, are loaded from
    environment variables when first requested.

    Args:
        extra: Additional providers, e.g. overrides for one deployment

    Returns:
        DI container with production providers
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    logfire.info(
        "DI container created",
        providers=[type(p).__name__ for p in providers + list(extra)],
    )
    return make_async_container(*providers, FastapiProvider(), *extra)


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach a container to a FastAPI application.

    Args:
        app: FastAPI application
        container: DI container serving request-scoped services
    """
    setup_dishka(container, app)
