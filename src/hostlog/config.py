"""Typed configuration — single source of truth for all hostlog runtime settings.

Loading priority (highest to lowest):
  1. Explicit init kwargs (programmatic overrides, tests)
  2. Environment variables: HOSTLOG_<SECTION>__<KEY>  (double-underscore separator)
  3. Config file: HOSTLOG_CONFIG_FILE env var, or conf/settings.toml at project root
  4. Model field defaults

Example env overrides:
  HOSTLOG_HOST__VERSION=16.0
  HOSTLOG_ENRICH__INCLUDE_BITNESS=false
  HOSTLOG_LOGGING__LEVEL=DEBUG
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

# Derive project root from this file's location: src/hostlog/config.py → ../../..
_PROJECT_ROOT = Path(__file__).parent.parent.parent
_DEFAULT_CONFIG = _PROJECT_ROOT / "conf" / "settings.toml"

EnricherName = Literal["path", "version", "version_name", "bitness"]

DEFAULT_TEMPLATE = "{Properties}{NewLine}[{Level}] {Message}{NewLine}{Exception}"


def _config_file() -> Path:
    """Resolve the config file path.

    Returns HOSTLOG_CONFIG_FILE if set (raises FileNotFoundError if missing),
    otherwise returns the bundled default at conf/settings.toml.
    """
    if env_val := os.environ.get("HOSTLOG_CONFIG_FILE"):
        p = Path(env_val)
        if not p.is_file():
            raise FileNotFoundError(f"HOSTLOG_CONFIG_FILE not found: {p}")
        return p
    return _DEFAULT_CONFIG


# ---------------------------------------------------------------------------
# Section models — each maps to a [section] in conf/settings.toml
# ---------------------------------------------------------------------------


class LoggingSettings(BaseModel):
    """Logging verbosity and output format."""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"

    @field_validator("level", mode="before")
    @classmethod
    def _normalise_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"level must be one of {sorted(valid)}, got {v!r}")
        return v.upper()


class HostSettings(BaseModel):
    """Facts the host application reports about itself.

    ``version`` stays None until the host integration knows it; the version
    enrichers then omit their property instead of guessing.
    """

    # Label prefix for version names: "Host 2016", "Excel 2016", …
    name: str = "Host"
    version: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    # Falls back to the running interpreter when unset.
    path: Path | None = None
    # Overrides the detected process bitness; only useful for diagnostics.
    force_bitness: Literal["32-bit", "64-bit"] | None = None


class EnrichSettings(BaseModel):
    """Which host enrichers ``EnrichmentBuilder.from_settings`` registers, in order."""

    enabled: list[EnricherName] = ["path", "version", "version_name", "bitness"]
    include_bitness: bool = True

    @field_validator("enabled")
    @classmethod
    def _no_duplicates(cls, v: list[str]) -> list[str]:
        if len(set(v)) != len(v):
            raise ValueError(f"enabled enrichers must be unique, got {v!r}")
        return v


class DisplaySettings(BaseModel):
    """In-app log display used by the sample add-in."""

    order: Literal["newest_first", "oldest_first"] = "newest_first"
    max_entries: int = Field(default=1000, gt=0)
    template: str = DEFAULT_TEMPLATE


class AddInSettings(BaseModel):
    name: str = "hostlog-sample"


# ---------------------------------------------------------------------------
# Root settings class
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """All hostlog runtime settings, fully resolved and validated."""

    logging: LoggingSettings = LoggingSettings()
    host: HostSettings = HostSettings()
    enrich: EnrichSettings = EnrichSettings()
    display: DisplaySettings = DisplaySettings()
    addin: AddInSettings = AddInSettings()

    model_config = SettingsConfigDict(
        env_prefix="HOSTLOG_",
        env_nested_delimiter="__",  # HOSTLOG_HOST__VERSION → host.version
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Exclude dotenv and file-secret sources; hostlog uses TOML + env only.
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=_config_file()),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide Settings instance (loaded once, cached thereafter).

    Tests should call ``get_settings.cache_clear()`` before each test that
    patches environment variables or the config file.
    """
    return Settings()
