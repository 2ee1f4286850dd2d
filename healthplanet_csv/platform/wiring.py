"""Dependency wiring for the command line use cases."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import httpx

from ..healthplanet.application import (
    AccessTokenProvider,
    ExportMeasurementsUseCase,
    HealthPlanetMeasurementsPort,
    TokenStore,
)
from ..healthplanet.infrastructure import (
    HealthPlanetTokenManager,
    JsonFileTokenStore,
    create_measurements_adapter,
    create_token_manager,
)
from .config import Settings


@contextmanager
def provide_http_client() -> Iterator[httpx.Client]:
    with httpx.Client() as http_client:
        yield http_client


def provide_token_store(settings: Settings) -> TokenStore:
    return JsonFileTokenStore(settings.token_file)


def provide_token_manager(
    settings: Settings, http_client: httpx.Client
) -> HealthPlanetTokenManager:
    return create_token_manager(
        store=provide_token_store(settings),
        http_client=http_client,
        settings=settings,
    )


def provide_measurements_port(
    settings: Settings,
    http_client: httpx.Client,
    token_provider: AccessTokenProvider,
) -> HealthPlanetMeasurementsPort:
    return create_measurements_adapter(
        token_provider=token_provider, http_client=http_client, settings=settings
    )


def get_export_measurements_use_case(
    settings: Settings, http_client: httpx.Client
) -> ExportMeasurementsUseCase:
    token_manager = provide_token_manager(settings, http_client)
    port = provide_measurements_port(settings, http_client, token_manager)
    return ExportMeasurementsUseCase(
        port,
        timezone=settings.timezone,
        max_window_days=settings.max_window_days,
    )


__all__ = [
    "get_export_measurements_use_case",
    "provide_http_client",
    "provide_measurements_port",
    "provide_token_manager",
    "provide_token_store",
]
