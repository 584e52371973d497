"""Path resolution for Atlas CLI configuration files."""

import os
import sys
from pathlib import Path

APP_DIRECTORY = "atlascli"


class ConfigHomeError(OSError):
    """Raised when the user configuration directory cannot be determined"""


def _user_config_dir() -> Path:
    """
    Get the platform's per-user configuration directory.

    Resolves to:
    - Windows: %AppData%
    - macOS: ~/Library/Application Support
    - Linux and other Unix: $XDG_CONFIG_HOME, falling back to ~/.config

    Raises:
        ConfigHomeError: If the required environment variables are not defined
    """
    if sys.platform == "win32":
        app_data = os.getenv("AppData")
        if not app_data:
            raise ConfigHomeError("%AppData% is not defined")
        return Path(app_data)

    if sys.platform == "darwin":
        home = os.getenv("HOME")
        if not home:
            raise ConfigHomeError("$HOME is not defined")
        return Path(home) / "Library" / "Application Support"

    xdg_config_home = os.getenv("XDG_CONFIG_HOME")
    if xdg_config_home:
        if not Path(xdg_config_home).is_absolute():
            raise ConfigHomeError("path in $XDG_CONFIG_HOME is relative")
        return Path(xdg_config_home)

    home = os.getenv("HOME")
    if not home:
        raise ConfigHomeError("neither $XDG_CONFIG_HOME nor $HOME are defined")
    return Path(home) / ".config"


def cli_config_home() -> Path:
    """Get the Atlas CLI configuration directory inside the user config directory"""
    return _user_config_dir() / APP_DIRECTORY


def config_path(suffix: str) -> str:
    """Append a suffix verbatim to the configuration home path"""
    return f"{cli_config_home()}{suffix}"
