"""Exceptions raised while exporting Health Planet measurements."""

from __future__ import annotations

from typing import Optional


class HealthPlanetError(RuntimeError):
    """Base class for fatal errors surfaced to the caller."""


class AuthError(HealthPlanetError):
    """Raised when no usable credential can be produced."""


class CredentialMissing(AuthError):
    """Raised when no credential has been stored yet."""

    def __init__(self, message: str = "No stored credential found, run the auth command first") -> None:
        super().__init__(message)


class AuthExchangeFailed(AuthError):
    """Raised when the authorization-code exchange is rejected."""


class CredentialAlreadyExists(AuthExchangeFailed):
    """Raised when ``authorize`` would overwrite a stored credential."""


class RefreshFailed(AuthError):
    """Raised when the refresh-token exchange is rejected."""


class CredentialPersistError(AuthError):
    """Raised when a freshly issued credential could not be written."""


class FetchError(HealthPlanetError):
    """Raised when the measurement endpoint does not answer with HTTP 200."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(HealthPlanetError, ValueError):
    """Raised when a payload or one of its fields cannot be decoded."""


class UnknownTagError(ParseError):
    """Raised for a sample tag that is neither weight nor body fat."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"Unknown measurement tag: {tag!r}")
        self.tag = tag


class MeasurementValidationError(ValueError):
    """Raised by a single record that fails validation; never fatal."""


__all__ = [
    "HealthPlanetError",
    "AuthError",
    "CredentialMissing",
    "AuthExchangeFailed",
    "CredentialAlreadyExists",
    "RefreshFailed",
    "CredentialPersistError",
    "FetchError",
    "ParseError",
    "UnknownTagError",
    "MeasurementValidationError",
]
