"""Ports for interacting with Health Planet."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from ...models.token import Credential


@runtime_checkable
class TokenStore(Protocol):
    """Durable home of the single OAuth2 credential."""

    def load(self) -> Optional[Credential]:
        """Return the stored credential or ``None`` when nothing is stored."""

    def save(self, credential: Credential) -> None:
        """Replace the stored credential."""

    def exists(self) -> bool:
        """Return ``True`` when a credential is stored."""


@runtime_checkable
class AccessTokenProvider(Protocol):
    """Anything able to hand out a currently valid access token."""

    def ensure_valid_token(self) -> str:
        """Return an access token, refreshing the credential if it is stale."""


@runtime_checkable
class HealthPlanetMeasurementsPort(Protocol):
    """Port that exposes the raw innerscan download."""

    def fetch(self, from_: datetime, to: datetime) -> bytes:
        """Return the raw innerscan payload for the requested window."""


__all__ = ["AccessTokenProvider", "HealthPlanetMeasurementsPort", "TokenStore"]
