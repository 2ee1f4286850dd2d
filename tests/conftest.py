"""Shared test fixtures and doubles."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, List, Optional

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from healthplanet_csv.models.token import Credential
from healthplanet_csv.platform.config import Settings


class TokenStoreFake:
    """In-memory token store that records every save."""

    def __init__(
        self,
        credential: Optional[Credential] = None,
        *,
        save_error: Optional[Exception] = None,
    ) -> None:
        self.credential = credential
        self.saved: List[Credential] = []
        self.load_calls = 0
        self._save_error = save_error

    def load(self) -> Optional[Credential]:
        self.load_calls += 1
        return self.credential

    def save(self, credential: Credential) -> None:
        if self._save_error is not None:
            raise self._save_error
        self.saved.append(credential)
        self.credential = credential

    def exists(self) -> bool:
        return self.credential is not None

    def assert_not_saved(self) -> None:
        assert not self.saved, f"Expected no save() call, saw {self.saved!r}"


class FrozenClock:
    """Mutable clock injected where the code asks for ``time.time``."""

    def __init__(self, current: datetime) -> None:
        if current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)
        self._current = current

    @property
    def current(self) -> datetime:
        return self._current

    def set(self, new_value: datetime) -> None:
        if new_value.tzinfo is None:
            new_value = new_value.replace(tzinfo=timezone.utc)
        self._current = new_value

    def advance(self, **delta: Any) -> None:
        self._current += timedelta(**delta)

    def timestamp(self) -> float:
        return self._current.timestamp()

    def __call__(self) -> float:
        return self.timestamp()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Canonical settings instance reused across tests."""

    return Settings(
        url="https://healthplanet.example.com",
        token_file=tmp_path / "token.json",
        client_id="client-id",
        client_secret="client-secret",
    )


@pytest.fixture
def freeze_time() -> FrozenClock:
    return FrozenClock(datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def token_store_fake() -> TokenStoreFake:
    return TokenStoreFake()
