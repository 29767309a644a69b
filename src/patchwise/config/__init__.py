"""Configuration loading, schema, and defaults."""

from patchwise.config.loader import ConfigError, load_config
from patchwise.config.schema import ApplyConfig, PatchwiseConfig

__all__ = [
    "ApplyConfig",
    "ConfigError",
    "PatchwiseConfig",
    "load_config",
]
