"""Configuration module exports."""

from .defaults import default, set_default
from .environment import CLI_USER_TYPE, HOSTNAME, user_agent
from .paths import ConfigHomeError, cli_config_home, config_path
from .profile import (
    AuthMechanism,
    Profile,
    ProfileNameHasDotsError,
    SetSaver,
    list_profiles,
    profile_exists,
)
from .properties import (
    boolean_properties,
    global_properties,
    is_true,
    properties,
)
from .store import ConfigFileNotFoundError, SettingsStore

__all__ = [
    "default",
    "set_default",
    "CLI_USER_TYPE",
    "HOSTNAME",
    "user_agent",
    "ConfigHomeError",
    "cli_config_home",
    "config_path",
    "AuthMechanism",
    "Profile",
    "ProfileNameHasDotsError",
    "SetSaver",
    "list_profiles",
    "profile_exists",
    "boolean_properties",
    "global_properties",
    "is_true",
    "properties",
    "ConfigFileNotFoundError",
    "SettingsStore",
]
