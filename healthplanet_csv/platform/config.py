from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple, Type

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from ..models.token import ONE_WEEK_SECONDS

DEFAULT_CONFIG_FILE = "config.yml"


class Settings(BaseSettings):
    """Application settings loaded from the environment and a YAML file.

    Environment variables use the ``HEALTHPLANET_`` prefix and win over the
    YAML file, so secrets can stay out of ``config.yml``.
    """

    model_config = SettingsConfigDict(
        env_prefix="HEALTHPLANET_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        yaml_file=DEFAULT_CONFIG_FILE,
        yaml_file_encoding="utf-8",
    )

    url: str = Field(
        default="https://www.healthplanet.jp",
        description="Base URL of the Health Planet service",
    )
    token_file: Path = Field(
        default=Path("token.json"), description="Where the OAuth2 credential is stored"
    )
    client_id: str
    client_secret: str
    redirect_uri: str = Field(default="http://localhost")
    scope: str = Field(default="innerscan,sphygmomanometer,pedometer,smug")
    timezone: str = Field(
        default="UTC", description="IANA timezone used to assign measurements to days"
    )
    refresh_grace_seconds: int = Field(
        default=ONE_WEEK_SECONDS,
        description="Refresh the token once it is this close to expiry",
    )
    max_window_days: int = Field(
        default=90, description="Largest date range accepted by the innerscan API"
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def load_settings(config_file: Optional[Path] = None) -> Settings:
    """Build settings reading ``config_file`` instead of ``config.yml``."""

    if config_file is None:
        return Settings()

    class _FileSettings(Settings):
        model_config = SettingsConfigDict(yaml_file=config_file)

    return _FileSettings()
