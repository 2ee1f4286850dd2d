"""Settings loading from YAML and the environment."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from healthplanet_csv.models.token import ONE_WEEK_SECONDS
from healthplanet_csv.platform.config import load_settings


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("URL", "TOKEN_FILE", "CLIENT_ID", "CLIENT_SECRET", "TIMEZONE"):
        monkeypatch.delenv(f"HEALTHPLANET_{name}", raising=False)


def _write_config(path: Path) -> Path:
    path.write_text(
        "url: https://www.healthplanet.jp\n"
        "token_file: secrets/token.json\n"
        "client_id: yaml-client\n"
        "client_secret: yaml-secret\n",
        encoding="utf-8",
    )
    return path


def test_load_settings_from_yaml(tmp_path: Path) -> None:
    settings = load_settings(_write_config(tmp_path / "custom.yml"))

    assert settings.url == "https://www.healthplanet.jp"
    assert settings.token_file == Path("secrets/token.json")
    assert settings.client_id == "yaml-client"
    assert settings.client_secret == "yaml-secret"
    assert settings.timezone == "UTC"
    assert settings.refresh_grace_seconds == ONE_WEEK_SECONDS
    assert settings.max_window_days == 90


def test_default_config_file_is_read_from_cwd(tmp_path: Path) -> None:
    _write_config(tmp_path / "config.yml")

    assert load_settings().client_id == "yaml-client"


def test_environment_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HEALTHPLANET_CLIENT_SECRET", "env-secret")
    monkeypatch.setenv("HEALTHPLANET_TIMEZONE", "Asia/Tokyo")

    settings = load_settings(_write_config(tmp_path / "custom.yml"))

    assert settings.client_secret == "env-secret"
    assert settings.timezone == "Asia/Tokyo"


def test_missing_credentials_fail_validation(tmp_path: Path) -> None:
    with pytest.raises(ValidationError):
        load_settings(tmp_path / "missing.yml")
