"""Health Planet integration modules."""

from .application import (
    ExportMeasurementsUseCase,
    HealthPlanetMeasurementsPort,
    TokenStore,
    export_measurements,
)
from .infrastructure import (
    HealthPlanetMeasurementsAdapter,
    HealthPlanetTokenManager,
    JsonFileTokenStore,
    create_measurements_adapter,
    create_token_manager,
)

__all__ = [
    "ExportMeasurementsUseCase",
    "HealthPlanetMeasurementsAdapter",
    "HealthPlanetMeasurementsPort",
    "HealthPlanetTokenManager",
    "JsonFileTokenStore",
    "TokenStore",
    "create_measurements_adapter",
    "create_token_manager",
    "export_measurements",
]
