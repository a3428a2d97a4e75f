"""
Configuration management for Extracta using Pydantic.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, ClassVar, cast

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from extracta.extractor.detector import CONTENT_BLOCK_THRESHOLD
from extracta.extractor.oembed import YOUTUBE_OEMBED_ENDPOINT
from extracta.extractor.variant import DEFAULT_MEDIA_TYPE

# --- Setup Logging ---
log = logging.getLogger(__name__)

CONFIG_FILE_NAMES = ("extracta.yaml", "extracta.yml")

# --- Nested Configuration Models ---


class ExtractionSettings(BaseModel):
    """Configuration for field resolution and content block detection."""

    content_block_threshold: int = Field(
        default=CONTENT_BLOCK_THRESHOLD,
        ge=0,
        description="A candidate must hold more than this many characters of text to become the content block.",
    )
    default_media_type: str = Field(
        default=DEFAULT_MEDIA_TYPE,
        description="Media type reported by the generic fallback variant.",
    )

    @field_validator("default_media_type")
    @classmethod
    def validate_media_type(cls, v: str) -> str:
        """Ensure the media type is a non-empty tag."""
        if not v.strip():
            raise ValueError("default_media_type must not be empty")
        return v.strip()


class OEmbedConfig(BaseModel):
    """Configuration for remote oEmbed lookups used by site variants."""

    enabled: bool = Field(default=True, description="Allow variants to query oEmbed endpoints.")
    endpoint: str = Field(default=YOUTUBE_OEMBED_ENDPOINT, description="oEmbed endpoint for video pages.")
    timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds.")
    user_agent: str = Field(
        default="ExtractaBot/0.1",
        description="User-Agent string for oEmbed requests.",
    )


class MonitoringConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(
        default=None,
        description="Path to log file. If None, logs to console.",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "Extracta"
    version: str = "0.1.0"
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    oembed: OEmbedConfig = Field(default_factory=OEmbedConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="EXTRACTA_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for name in CONFIG_FILE_NAMES:
        path = current_dir / name
        if path.exists():
            return path
    return None


# --- Lazy Configuration Loader ---


class LazyConfig:
    """
    Process-wide configuration, read from the working directory on first use.

    Attribute access on an instance is forwarded to the loaded :class:`Config`,
    so importing :data:`settings` never fails on a broken configuration file.
    """

    _config: ClassVar[Config | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def load(cls) -> Config:
        """Return the shared configuration, loading it on the first call."""
        if cls._config is None:
            with cls._lock:
                if cls._config is None:
                    cls._config = cls._discover()
        return cls._config

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded configuration so the next access reloads it."""
        with cls._lock:
            cls._config = None

    @staticmethod
    def _discover() -> Config:
        path = find_config_file()
        if path is None:
            log.info("No extracta.yaml in %s, using defaults", Path.cwd())
            return Config()

        try:
            log.info("Loading configuration from %s", path)
            return Config.from_yaml(path)
        except (ValidationError, yaml.YAMLError) as e:
            # An unreadable discovered file must not stop the process
            log.error("Ignoring invalid configuration in %s: %s", path, e)
            return Config()

    def __getattr__(self, name: str) -> Any:
        return getattr(self.load(), name)


# Typed as Config for callers; attribute access loads it on demand.
settings: "Config" = cast("Config", LazyConfig())
