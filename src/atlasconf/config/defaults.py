"""Process default profile and module-level shortcuts to it.

The default profile and its settings store are built once, when this module
is imported. Applications and tests that need isolation inject their own with
``set_default``.
"""

from pathlib import Path
from typing import Any, Optional

import requests

from atlasconf.auth.token import Token

from .profile import AuthMechanism, Profile, list_profiles, profile_exists
from .store import SettingsStore

_default_profile = Profile(store=SettingsStore())


def default() -> Profile:
    """Get the process default profile"""
    return _default_profile


def set_default(profile: Profile) -> Profile:
    """Replace the process default profile, returning the previous one"""
    global _default_profile
    previous = _default_profile
    _default_profile = profile
    return previous


def profiles() -> list[str]:
    """List profile names known to the default profile's store"""
    return list_profiles(default().store)


def exists(name: str) -> bool:
    """Check if a profile exists in the default profile's store"""
    return profile_exists(name, default().store)


def name() -> str:
    """Get the default profile's name"""
    return default().name


def set_name(value: str) -> None:
    """Rename the default profile in memory, see ``Profile.set_name``"""
    default().set_name(value)


def set(key: str, value: Any) -> None:  # noqa: A001
    """Set a key on the default profile"""
    default().set(key, value)


def set_global(key: str, value: Any) -> None:
    """Set a top-level key shared by every profile"""
    default().set_global(key, value)


def get(key: str) -> Any:
    """Get a key, global scope first, then the default profile"""
    return default().get(key)


def get_string(key: str) -> str:
    """Get a key as a string, empty when unset"""
    return default().get_string(key)


def get_bool(key: str) -> bool:
    """Get a key as a bool, False when unset"""
    return default().get_bool(key)


def service() -> str:
    """Get the service the default profile talks to"""
    return default().service()


def set_service(value: str) -> None:
    """Set the default profile's service"""
    default().set_service(value)


def is_cloud() -> bool:
    """Check if the default profile targets Atlas or Atlas for Government"""
    return default().is_cloud()


def public_api_key() -> str:
    """Get the default profile's public API key"""
    return default().public_api_key()


def set_public_api_key(value: str) -> None:
    """Set the default profile's public API key"""
    default().set_public_api_key(value)


def private_api_key() -> str:
    """Get the default profile's private API key"""
    return default().private_api_key()


def set_private_api_key(value: str) -> None:
    """Set the default profile's private API key"""
    default().set_private_api_key(value)


def access_token() -> str:
    """Get the default profile's OAuth access token"""
    return default().access_token()


def set_access_token(value: str) -> None:
    """Set the default profile's OAuth access token"""
    default().set_access_token(value)


def refresh_token() -> str:
    """Get the default profile's OAuth refresh token"""
    return default().refresh_token()


def set_refresh_token(value: str) -> None:
    """Set the default profile's OAuth refresh token"""
    default().set_refresh_token(value)


def client_id() -> str:
    """Get the OAuth client ID of the default profile"""
    return default().client_id()


def auth_type() -> AuthMechanism:
    """Get how the default profile authenticates"""
    return default().auth_type()


def is_access_set() -> bool:
    """Check if both API keys are set on the default profile"""
    return default().is_access_set()


def token() -> Optional[Token]:
    """Get the default profile's OAuth token, or None without one"""
    return default().token()


def access_token_subject() -> str:
    """Get the subject claim of the default profile's access token"""
    return default().access_token_subject()


def ops_manager_url() -> str:
    """Get the default profile's API base URL"""
    return default().ops_manager_url()


def set_ops_manager_url(value: str) -> None:
    """Set the default profile's API base URL"""
    default().set_ops_manager_url(value)


def project_id() -> str:
    """Get the default profile's project ID"""
    return default().project_id()


def set_project_id(value: str) -> None:
    """Set the default profile's project ID"""
    default().set_project_id(value)


def org_id() -> str:
    """Get the default profile's organization ID"""
    return default().org_id()


def set_org_id(value: str) -> None:
    """Set the default profile's organization ID"""
    default().set_org_id(value)


def output() -> str:
    """Get the default profile's output format"""
    return default().output()


def set_output(value: str) -> None:
    """Set the default profile's output format"""
    default().set_output(value)


def mongosh_path() -> str:
    """Get the global mongosh path"""
    return default().mongosh_path()


def set_mongosh_path(value: str) -> None:
    """Set the global mongosh path"""
    default().set_mongosh_path(value)


def skip_update_check() -> bool:
    """Check if update checks are turned off"""
    return default().skip_update_check()


def set_skip_update_check(value: bool) -> None:
    """Turn update checks on or off"""
    default().set_skip_update_check(value)


def is_telemetry_enabled_set() -> bool:
    """Check if telemetry has been explicitly configured"""
    return default().is_telemetry_enabled_set()


def telemetry_enabled() -> bool:
    """Check if telemetry is enabled"""
    return default().telemetry_enabled()


def set_telemetry_enabled(value: bool) -> None:
    """Turn telemetry on or off, ignored under DO_NOT_TRACK"""
    default().set_telemetry_enabled(value)


def map() -> dict[str, str]:  # noqa: A001
    """Get the default profile's settings with secrets redacted"""
    return default().map()


def sorted_keys() -> list[str]:
    """Get the default profile's setting names, sorted"""
    return default().sorted_keys()


def filename() -> Path:
    """Get the path of the configuration file"""
    return default().filename()


def load_config(read_environment_vars: bool = True) -> None:
    """Load the configuration file into the default profile's store"""
    default().load_config(read_environment_vars)


def save() -> None:
    """Write the whole configuration document to disk"""
    default().save()


def delete() -> None:
    """Remove the default profile from the configuration file"""
    default().delete()


def rename(new_name: str) -> None:
    """Rename the default profile in the configuration file"""
    default().rename(new_name)


def http_transport(base: Optional[requests.Session] = None) -> requests.Session:
    """Get a session carrying the default profile's credentials"""
    return default().http_transport(base)


def http_client() -> requests.Session:
    """Get a new session carrying the default profile's credentials"""
    return default().http_client()


def http_base_url() -> str:
    """Get the base URL for API requests"""
    return default().http_base_url()
