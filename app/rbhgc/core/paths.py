"""Location of the rbhgc configuration file.

The file lives under ``$XDG_CONFIG_HOME/rbhgc/``, falling back to
``~/.config/rbhgc/``.
"""

import os
from pathlib import Path

APP_NAME = "rbhgc"
CONFIG_FILENAME = "config.toml"


def get_config_dir() -> Path:
    """Get the directory holding the rbhgc configuration.

    An unset, empty or relative ``XDG_CONFIG_HOME`` is ignored, as the
    base directory must be absolute.

    Returns:
        Path to the rbhgc configuration directory.
    """
    xdg_home = os.environ.get("XDG_CONFIG_HOME", "")
    base = Path(xdg_home) if os.path.isabs(xdg_home) else Path.home() / ".config"
    return base / APP_NAME


def get_config_path() -> Path:
    """Get the path of the default configuration file."""
    return get_config_dir() / CONFIG_FILENAME
