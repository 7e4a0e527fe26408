"""Core infrastructure for rbhgc: configuration and paths."""

from rbhgc.core.config import ConfigError, GCConfig, load_config
from rbhgc.core.paths import get_config_dir, get_config_path

__all__ = [
    "ConfigError",
    "GCConfig",
    "get_config_dir",
    "get_config_path",
    "load_config",
]
