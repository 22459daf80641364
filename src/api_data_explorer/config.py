"""Configuration management using Pydantic settings with optional file persistence."""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .models import Source

# --- Paths ---

APP_NAME = "api-data-explorer"


def get_config_dir() -> Path:
    """Get the configuration directory (e.g. ~/.config/api-data-explorer)."""
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", Path.home() / ".config")).expanduser()
    else:
        base = Path("~/.config").expanduser()

    return base / APP_NAME


CONFIG_FILE = get_config_dir() / "config.json"


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    """Load settings from the JSON config file if it exists."""
    path = path or CONFIG_FILE
    if not path.exists():
        return {}

    try:
        text = path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        return json.loads(text)
    except (OSError, json.JSONDecodeError):
        return {}


def save_config_file(config_data: dict[str, Any], path: Path | None = None) -> Path:
    """Save settings to the JSON config file."""
    path = path or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config_data, indent=2), encoding="utf-8")
    return path


class _EnvFirstSettings(BaseSettings):
    """Settings whose environment variables win over constructor (config file) values."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, dotenv_settings, init_settings, file_secret_settings


class HttpSettings(_EnvFirstSettings):
    """Outbound HTTP configuration."""

    model_config = SettingsConfigDict(env_prefix="API_EXPLORER_HTTP_")

    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")
    user_agent: str = Field(default="api-data-explorer/0.1")
    jsonplaceholder_url: str = Field(default="https://jsonplaceholder.typicode.com")
    dummyjson_url: str = Field(default="https://dummyjson.com")


class ExplorerSettings(_EnvFirstSettings):
    """Explorer behavior configuration."""

    model_config = SettingsConfigDict(env_prefix="API_EXPLORER_EXPLORER_")

    page_size: int = Field(default=12, ge=1)
    debounce_ms: int = Field(default=500, ge=0, description="Search quiescence window in milliseconds")
    default_source: Source = Field(default=Source.POSTS)

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


class AppSettings(_EnvFirstSettings):
    """Root application settings.

    Priority: Environment Variables > Config File > Defaults
    """

    model_config = SettingsConfigDict(env_prefix="API_EXPLORER_", extra="ignore")

    logging_level: str = Field(default="INFO")
    http: HttpSettings = Field(default_factory=HttpSettings)
    explorer: ExplorerSettings = Field(default_factory=ExplorerSettings)

    @field_validator("http", mode="before")
    @classmethod
    def _build_http(cls, value: Any) -> Any:
        # Nested sections from the config file still get their own env overlay
        return HttpSettings(**value) if isinstance(value, dict) else value

    @field_validator("explorer", mode="before")
    @classmethod
    def _build_explorer(cls, value: Any) -> Any:
        return ExplorerSettings(**value) if isinstance(value, dict) else value

    def save(self, path: Path | None = None) -> Path:
        """Save current configuration to file."""
        data = self.model_dump(mode="json", exclude_none=True)
        return save_config_file(data, path)


def _load_settings() -> AppSettings:
    """Load settings with file config as base, env vars overlay."""
    file_data = load_config_file()
    # Pydantic will overlay env vars on top
    return AppSettings(**file_data)


settings = _load_settings()
