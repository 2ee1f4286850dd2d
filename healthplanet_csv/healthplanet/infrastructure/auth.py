"""OAuth2 credential lifecycle for the Health Planet API."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict

import httpx

from ...errors import (
    AuthError,
    AuthExchangeFailed,
    CredentialAlreadyExists,
    CredentialMissing,
    CredentialPersistError,
    RefreshFailed,
)
from ...models.token import Credential
from ...platform.config import Settings
from ..application.ports import TokenStore

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class HealthPlanetTokenManager:
    """Issue, refresh and persist the Health Planet credential.

    The credential lives in ``store``; nothing is cached on the instance, so
    every call sees what is on disk. A refresh is attempted proactively once
    the credential is within ``settings.refresh_grace_seconds`` of expiry.
    """

    def __init__(
        self,
        store: TokenStore,
        http_client: httpx.Client,
        settings: Settings,
        clock: Clock = time.time,
    ) -> None:
        self._store = store
        self._http_client = http_client
        self._settings = settings
        self._clock = clock

    def authorization_url(self) -> str:
        """Return the URL the user opens to grant access."""

        params = {
            "client_id": self._settings.client_id,
            "client_secret": self._settings.client_secret,
            "redirect_uri": self._settings.redirect_uri,
            "response_type": "code",
            "scope": self._settings.scope,
        }
        return str(httpx.URL(f"{self._base_url}/oauth/auth", params=params))

    def authorize(self, code: str) -> Credential:
        """Exchange an authorization code for the first credential.

        Refuses to run while a credential is stored; the token file has to be
        removed by hand to authorize again.
        """

        if self._store.exists():
            raise CredentialAlreadyExists(
                "A credential is already stored. Remove the token file to authorize again."
            )

        body = self._request_token(
            {"grant_type": "authorization_code", "code": code},
            error_cls=AuthExchangeFailed,
            action="exchange authorization code",
        )
        credential = Credential(
            access_token=body["access_token"],
            refresh_token=body.get("refresh_token") or "",
            expires_in=body["expires_in"],
            create_date=int(self._clock()),
        )
        self._persist(credential)
        logger.info("Authorization succeeded")
        return credential

    def refresh(self, credential: Credential) -> Credential:
        """Mint a new access token and persist it.

        On failure the stored credential is left untouched.
        """

        logger.info("Refreshing Health Planet access token")
        body = self._request_token(
            {"grant_type": "refresh_token", "refresh_token": credential.refresh_token},
            error_cls=RefreshFailed,
            action="refresh access token",
        )
        refreshed = credential.model_copy(
            update={
                "access_token": body["access_token"],
                "refresh_token": body.get("refresh_token") or credential.refresh_token,
                "expires_in": body.get("expires_in", credential.expires_in),
                "create_date": int(self._clock()),
            }
        )
        self._persist(refreshed)
        logger.info("Access token refreshed, valid until %s", refreshed.expires_at())
        return refreshed

    def ensure_valid_token(self) -> str:
        credential = self._store.load()
        if credential is None:
            raise CredentialMissing()

        if credential.needs_refresh(self._clock(), self._settings.refresh_grace_seconds):
            credential = self.refresh(credential)
        return credential.access_token

    @property
    def _base_url(self) -> str:
        return self._settings.url.rstrip("/")

    def _request_token(
        self,
        grant: Dict[str, str],
        *,
        error_cls: type[AuthError],
        action: str,
    ) -> Dict[str, Any]:
        params = {
            "client_id": self._settings.client_id,
            "client_secret": self._settings.client_secret,
            "redirect_uri": self._settings.redirect_uri,
            **grant,
        }
        try:
            response = self._http_client.post(
                f"{self._base_url}/oauth/token", params=params
            )
        except httpx.HTTPError as exc:
            raise error_cls(f"Failed to {action}: {exc}") from exc

        if response.status_code != 200:
            raise error_cls(f"Failed to {action}: HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError as exc:
            raise error_cls(f"Failed to {action}: response is not JSON") from exc

        if not isinstance(body, dict) or not body.get("access_token"):
            raise error_cls(f"Failed to {action}: response missing access token")
        expires_in = body.get("expires_in")
        if expires_in is None and error_cls is AuthExchangeFailed:
            raise error_cls(f"Failed to {action}: response missing expires_in")
        if expires_in is not None:
            try:
                body["expires_in"] = int(expires_in)
            except (TypeError, ValueError) as exc:
                raise error_cls(f"Failed to {action}: invalid expires_in {expires_in!r}") from exc
        return body

    def _persist(self, credential: Credential) -> None:
        try:
            self._store.save(credential)
        except OSError as exc:
            raise CredentialPersistError(
                f"Credential was issued but could not be saved: {exc}"
            ) from exc


def create_token_manager(
    *,
    store: TokenStore,
    http_client: httpx.Client,
    settings: Settings,
    clock: Clock = time.time,
) -> HealthPlanetTokenManager:
    return HealthPlanetTokenManager(store, http_client, settings, clock)


__all__ = ["HealthPlanetTokenManager", "create_token_manager"]
