"""Configuration models and the lazily loaded global settings."""

from .config import (
    Config,
    ExtractionSettings,
    LazyConfig,
    MonitoringConfig,
    OEmbedConfig,
    find_config_file,
    settings,
)

__all__ = [
    "Config",
    "ExtractionSettings",
    "LazyConfig",
    "MonitoringConfig",
    "OEmbedConfig",
    "find_config_file",
    "settings",
]
