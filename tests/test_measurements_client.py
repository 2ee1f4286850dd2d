"""Innerscan download behaviour."""

from __future__ import annotations

from datetime import datetime
from typing import Iterator

import httpx
import pytest
import respx

from healthplanet_csv.errors import CredentialMissing, FetchError
from healthplanet_csv.healthplanet.infrastructure.client import HealthPlanetMeasurementsAdapter
from healthplanet_csv.platform.config import Settings

from tests.builders import encode, make_innerscan_payload

INNERSCAN_URL = "https://healthplanet.example.com/status/innerscan.json"


class StaticTokenProvider:
    def __init__(self, token: str = "access", error: Exception | None = None) -> None:
        self.calls = 0
        self._token = token
        self._error = error

    def ensure_valid_token(self) -> str:
        self.calls += 1
        if self._error is not None:
            raise self._error
        return self._token


@pytest.fixture
def http_client() -> Iterator[httpx.Client]:
    with httpx.Client() as client:
        yield client


def test_fetch_sends_window_and_tags(
    respx_mock: respx.Router, http_client: httpx.Client, settings: Settings
) -> None:
    body = encode(make_innerscan_payload(("202405010800", "65.0", "20.0")))
    route = respx_mock.get(INNERSCAN_URL).mock(return_value=httpx.Response(200, content=body))
    provider = StaticTokenProvider()

    adapter = HealthPlanetMeasurementsAdapter(provider, http_client, settings)
    payload = adapter.fetch(datetime(2024, 5, 1), datetime(2024, 5, 31, 23, 59, 59))

    assert payload == body
    assert provider.calls == 1
    params = route.calls.last.request.url.params
    assert params["access_token"] == "access"
    assert params["date"] == "1"
    assert params["from"] == "20240501000000"
    assert params["to"] == "20240531235959"
    assert params["tag"] == "6021,6022"


@pytest.mark.parametrize("status_code", [401, 500, 503])
def test_fetch_non_200_is_fetch_error(
    respx_mock: respx.Router,
    http_client: httpx.Client,
    settings: Settings,
    status_code: int,
) -> None:
    respx_mock.get(INNERSCAN_URL).mock(return_value=httpx.Response(status_code))

    adapter = HealthPlanetMeasurementsAdapter(StaticTokenProvider(), http_client, settings)

    with pytest.raises(FetchError) as excinfo:
        adapter.fetch(datetime(2024, 5, 1), datetime(2024, 5, 2))

    assert excinfo.value.status_code == status_code


def test_fetch_transport_error_is_fetch_error(
    respx_mock: respx.Router, http_client: httpx.Client, settings: Settings
) -> None:
    respx_mock.get(INNERSCAN_URL).mock(side_effect=httpx.ConnectTimeout("slow"))

    adapter = HealthPlanetMeasurementsAdapter(StaticTokenProvider(), http_client, settings)

    with pytest.raises(FetchError) as excinfo:
        adapter.fetch(datetime(2024, 5, 1), datetime(2024, 5, 2))

    assert excinfo.value.status_code is None


def test_fetch_propagates_auth_errors(http_client: httpx.Client, settings: Settings) -> None:
    adapter = HealthPlanetMeasurementsAdapter(
        StaticTokenProvider(error=CredentialMissing()), http_client, settings
    )

    with pytest.raises(CredentialMissing):
        adapter.fetch(datetime(2024, 5, 1), datetime(2024, 5, 2))
