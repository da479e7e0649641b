"""
Application DI Container (dependency-injector).

Centralizes source client creation and lifecycle management. Every client
is built from one ``LegalSearchSettings`` object; no client reads the
environment itself.

Usage::

    from us_legal_search.config import LegalSearchSettings
    from us_legal_search.container import ApplicationContainer

    container = ApplicationContainer()
    container.settings.override(providers.Object(LegalSearchSettings(congress_api_key="...")))

    congress = container.congress()
    aggregator = container.aggregator()

    # In tests, override any provider:
    container.congress.override(providers.Object(mock_congress))
"""

from __future__ import annotations

import logging

from dependency_injector import containers, providers

from us_legal_search.application.search.aggregator import LegalSearchAggregator
from us_legal_search.config import LegalSearchSettings
from us_legal_search.infrastructure.sources import (
    CongressClient,
    CourtListenerClient,
    FederalRegisterClient,
    RegulationsGovClient,
    USCodeClient,
)

logger = logging.getLogger(__name__)


class ApplicationContainer(containers.DeclarativeContainer):
    """Central DI container for the US Legal Search application.

    Manages creation and lifecycle of all services:
    - ``settings``: process configuration (from the environment by default)
    - ``congress`` / ``federal_register`` / ``us_code`` / ``regulations`` /
      ``court_listener``: one source client each
    - ``aggregator``: concurrent multi-source search over the clients
    """

    settings = providers.Singleton(LegalSearchSettings.from_env)

    congress = providers.Singleton(CongressClient, settings=settings)
    federal_register = providers.Singleton(FederalRegisterClient, settings=settings)
    us_code = providers.Singleton(USCodeClient, settings=settings)
    regulations = providers.Singleton(RegulationsGovClient, settings=settings)
    court_listener = providers.Singleton(CourtListenerClient, settings=settings)

    aggregator = providers.Singleton(
        LegalSearchAggregator,
        congress=congress,
        federal_register=federal_register,
        us_code=us_code,
        regulations=regulations,
        court_listener=court_listener,
    )


def build_container(settings: LegalSearchSettings | None = None) -> ApplicationContainer:
    """Create a container, optionally pinned to explicit settings."""
    container = ApplicationContainer()
    if settings is not None:
        container.settings.override(providers.Object(settings))
    logger.info(f"Credentials configured: {container.settings().credential_summary()}")
    return container


async def close_clients(container: ApplicationContainer) -> None:
    """Close every source client the container has created."""
    for provider in (
        container.congress,
        container.federal_register,
        container.us_code,
        container.regulations,
        container.court_listener,
    ):
        await provider().close()


__all__ = ["ApplicationContainer", "build_container", "close_clients"]
