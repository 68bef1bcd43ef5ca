"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (ISHTML5__SERVER__PORT=9090)
  2. ishtml5.yaml           (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults. The cache
freshness window is not a setting; see ``CACHE_FRESHNESS`` in resolver.py.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from ishtml5 import USER_AGENT

_DEFAULT_DATA_DIR = platformdirs.user_data_dir("ishtml5")
_DEFAULT_DB_PATH = str(Path(_DEFAULT_DATA_DIR) / "cache.db")


def _find_config_file() -> str | None:
    """Return the path of the first ishtml5.yaml found, or None."""
    candidates = [
        Path("ishtml5.yaml"),
        Path(platformdirs.user_config_dir("ishtml5")) / "ishtml5.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class CacheSettings(BaseModel):
    db_path: str = _DEFAULT_DB_PATH


class FetcherSettings(BaseModel):
    user_agent: str = USER_AGENT
    timeout_seconds: float = 5.0  # httpx's own default


class DetectorSettings(BaseModel):
    # "prefix" is the older literal `<!doctype html>` match
    mode: Literal["doctype_name", "prefix"] = "doctype_name"


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: ISHTML5__CACHE__DB_PATH=/tmp/c.db
        env_prefix="ISHTML5__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    cache: CacheSettings = CacheSettings()
    fetcher: FetcherSettings = FetcherSettings()
    detector: DetectorSettings = DetectorSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
        )
