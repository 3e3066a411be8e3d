"""Configuration management for the recommendation archive."""

from .loader import DEFAULT_CONFIG_DIR, Config, load_config, save_config
from .models import ConfigModel, PostgresConfig, ScraperConfig

__all__ = [
    "Config",
    "ConfigModel",
    "DEFAULT_CONFIG_DIR",
    "PostgresConfig",
    "ScraperConfig",
    "load_config",
    "save_config",
]
