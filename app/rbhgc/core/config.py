"""Configuration model and loading.

Configuration is stored in ~/.config/rbhgc/config.toml::

    # Host-provided identity resolver (module:attribute)
    resolver = "mysite.handles:OpenByHandleResolver"
    log_level = "INFO"

Every key is optional.
"""

import tomllib
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from rbhgc.core.paths import get_config_path

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class GCConfig(BaseModel):
    """Configuration for rbhgc.

    Attributes:
        resolver: Reference to the host's identity resolver, as
            ``module:attribute``. None selects the unsupported resolver.
        log_level: Logging level when --verbose is not given.
    """

    model_config = ConfigDict(extra="forbid")

    resolver: Annotated[
        str | None,
        Field(description="Identity resolver reference (module:attribute)"),
    ] = None
    log_level: Annotated[
        LogLevel,
        Field(description="Logging level"),
    ] = "WARNING"


class ConfigError(Exception):
    """Raised when the configuration cannot be loaded."""


def load_config(path: Path | None = None) -> GCConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config
            path, and a missing file yields the default configuration.

    Returns:
        Validated GCConfig object.

    Raises:
        ConfigError: If an explicit file is missing, the TOML syntax is
            invalid, or the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        if path is not None:
            raise ConfigError(f"Config file not found: {config_path}")
        return GCConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return GCConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e
