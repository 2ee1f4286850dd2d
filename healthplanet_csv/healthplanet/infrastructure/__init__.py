"""Infrastructure helpers for Health Planet integration."""

from .auth import HealthPlanetTokenManager, create_token_manager
from .client import HealthPlanetMeasurementsAdapter, create_measurements_adapter
from .token_store import JsonFileTokenStore

__all__ = [
    "HealthPlanetMeasurementsAdapter",
    "HealthPlanetTokenManager",
    "JsonFileTokenStore",
    "create_measurements_adapter",
    "create_token_manager",
]
