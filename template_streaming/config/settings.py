import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from template_streaming.core.errors import ConfigurationError
from template_streaming.core.logging import get_logger

from .core import LoggingSettings, StreamingSettings, TemplateSettings


__all__ = ["ConfigurationError", "Settings", "get_settings"]


class Settings(BaseSettings):
    """
    Configuration settings for template streaming.

    Settings are loaded from environment variables, .env files and an optional
    TOML file. Environment variables take precedence over file values.
    Nested sections use a double underscore, e.g. STREAMING__AUTOSWEEP_FLASH.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    streaming: StreamingSettings = Field(
        default_factory=StreamingSettings,
        description="Streaming behaviour settings",
    )

    templates: TemplateSettings = Field(
        default_factory=TemplateSettings,
        description="Template lookup settings",
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    @classmethod
    def load_toml_config(cls, toml_path: Path) -> dict[str, Any]:
        """Load configuration from a TOML file."""
        try:
            with toml_path.open("rb") as f:
                return tomllib.load(f)
        except OSError as e:
            raise ConfigurationError(f"Cannot read TOML config file {toml_path}: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML syntax in {toml_path}: {e}") from e

    @classmethod
    def from_config(
        cls, config_path: Path | str | None = None, **kwargs: Any
    ) -> "Settings":
        """Create Settings from a TOML file, environment and keyword overrides."""
        if config_path is None:
            config_path_env = os.environ.get("CONFIG_FILE")
            if config_path_env:
                config_path = Path(config_path_env)

        if isinstance(config_path, str):
            config_path = Path(config_path)

        config_data: dict[str, Any] = {}
        if config_path is not None:
            if config_path.suffix.lower() != ".toml":
                raise ConfigurationError(
                    f"Unsupported config file format: {config_path.suffix}. "
                    "Only TOML (.toml) files are supported."
                )
            config_data = cls.load_toml_config(config_path)
            get_logger(__name__).info(
                "config_file_loaded", path=str(config_path), category="config"
            )

        settings = cls()

        for key, value in config_data.items():
            section = getattr(settings, key, None)
            if isinstance(section, BaseModel) and isinstance(value, dict):
                for nested_key, nested_value in value.items():
                    env_key = f"{key.upper()}__{nested_key.upper()}"
                    if os.getenv(env_key) is None:
                        setattr(section, nested_key, nested_value)

        for key, value in kwargs.items():
            section = getattr(settings, key, None)
            if isinstance(section, BaseModel) and isinstance(value, dict):
                for nested_key, nested_value in value.items():
                    setattr(section, nested_key, nested_value)
            else:
                setattr(settings, key, value)

        return settings


@lru_cache
def get_settings() -> Settings:
    """Get the cached application settings."""
    return Settings.from_config()
