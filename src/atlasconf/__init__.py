"""
atlasconf - profile configuration for the Atlas CLI

Code is organized in layers
- config/ holds the settings store, profiles and environment-derived values
- auth/ reads OAuth token claims
- connection/ turns a profile's credentials into authenticated HTTP sessions
"""

# Layer 1: Settings and profiles
from atlasconf.config import (
    AuthMechanism,
    Profile,
    ProfileNameHasDotsError,
    SettingsStore,
    default,
    list_profiles,
    set_default,
    user_agent,
)

# Layer 2: Credentials
from atlasconf.auth import Token
from atlasconf.connection import BearerTokenAuth

__version__ = "0.1.0"
__all__ = [
    # Layer 1: Settings and profiles
    "AuthMechanism",
    "Profile",
    "ProfileNameHasDotsError",
    "SettingsStore",
    "default",
    "list_profiles",
    "set_default",
    "user_agent",
    # Layer 2: Credentials
    "Token",
    "BearerTokenAuth",
]
