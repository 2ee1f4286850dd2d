"""Application layer helpers for Health Planet integration."""

from .ports import AccessTokenProvider, HealthPlanetMeasurementsPort, TokenStore
from .services import ExportMeasurementsUseCase, export_measurements, validate_window

__all__ = [
    "AccessTokenProvider",
    "ExportMeasurementsUseCase",
    "HealthPlanetMeasurementsPort",
    "TokenStore",
    "export_measurements",
    "validate_window",
]
