"""Configuration loading from environment variables and TOML files."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

CONFIG_DIR_ENV = "AGENT_NETWORK_CONFIG_DIR"


def get_config_dir() -> Path:
    """Get the directory holding TOML config files."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    return Path.cwd() / "config"


class NetworkConfig(BaseModel):
    """Agent network configuration."""

    default_model: Optional[str] = None
    # Used for agent inference when the network has no default model
    fallback_model: str = "claude-sonnet-4-20250514"
    inference_max_tokens: int = 50


class GenerationConfig(BaseModel):
    """Defaults applied to provider calls."""

    max_tokens: int = 4096
    temperature: Optional[float] = None


class Settings(BaseSettings):
    """Main settings class.

    Precedence, highest first: constructor arguments, environment, ``.env``,
    ``config/settings.toml``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Environment variables
    anthropic_api_key: str = ""
    log_level: str = "INFO"

    # Usually set in settings.toml
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_settings = TomlConfigSettingsSource(
            settings_cls, toml_file=get_config_dir() / "settings.toml"
        )
        return (init_settings, env_settings, dotenv_settings, toml_settings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
