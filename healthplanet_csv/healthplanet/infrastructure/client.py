"""HTTP-backed implementation of the Health Planet measurements port."""

from __future__ import annotations

import logging
from datetime import datetime

import httpx

from ...errors import FetchError
from ...models.body import MeasurementTag
from ...platform.config import Settings
from ..application.ports import AccessTokenProvider, HealthPlanetMeasurementsPort

logger = logging.getLogger(__name__)

# "1" selects the measurement date rather than the upload date for from/to.
DATE_MODE_MEASURED = "1"
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


class HealthPlanetMeasurementsAdapter(HealthPlanetMeasurementsPort):
    """Download innerscan data with a token from ``token_provider``.

    The window is passed through unchecked; callers keep it within the
    three month limit of the API.
    """

    def __init__(
        self,
        token_provider: AccessTokenProvider,
        http_client: httpx.Client,
        settings: Settings,
    ) -> None:
        self._token_provider = token_provider
        self._http_client = http_client
        self._settings = settings

    def fetch(self, from_: datetime, to: datetime) -> bytes:
        """Fetch innerscan samples measured between ``from_`` and ``to``."""

        access_token = self._token_provider.ensure_valid_token()
        url = f"{self._settings.url.rstrip('/')}/status/innerscan.json"
        params = {
            "access_token": access_token,
            "date": DATE_MODE_MEASURED,
            "from": from_.strftime(TIMESTAMP_FORMAT),
            "to": to.strftime(TIMESTAMP_FORMAT),
            "tag": ",".join(tag.value for tag in MeasurementTag),
        }
        logger.debug(
            "Requesting %s from=%s to=%s", url, params["from"], params["to"]
        )

        try:
            response = self._http_client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise FetchError(f"Failed to get innerscan data: {exc}") from exc

        if response.status_code != 200:
            raise FetchError(
                f"Failed to get innerscan data: HTTP {response.status_code}",
                status_code=response.status_code,
            )

        logger.debug("Received %d bytes of innerscan data", len(response.content))
        return response.content


def create_measurements_adapter(
    *,
    token_provider: AccessTokenProvider,
    http_client: httpx.Client,
    settings: Settings,
) -> HealthPlanetMeasurementsPort:
    """Create a Health Planet measurements adapter."""
    return HealthPlanetMeasurementsAdapter(token_provider, http_client, settings)
