"""Process-wide values derived from environment variables.

The agent hostname and CLI user type are resolved once, when this module is
first imported, and stay fixed for the life of the process.
"""

import os
import platform
import sys

from .properties import MONGO_CLI_ENV_PREFIX, is_true

ATLAS_CLI = "atlascli"

CONTAINERIZED_HOSTNAME_ENV = "MONGODB_ATLAS_IS_CONTAINERIZED"
GITHUB_ACTIONS_HOSTNAME_ENV = "GITHUB_ACTIONS"
ATLAS_ACTION_HOSTNAME_ENV = "ATLAS_GITHUB_ACTION"
CLI_USER_TYPE_ENV = "CLI_USER_TYPE"
DO_NOT_TRACK_ENV = "DO_NOT_TRACK"

DEFAULT_USER = "default"  # users that do not run the CLI through MongoDB University
UNIVERSITY_USER = "university"

NATIVE_HOSTNAME = "native"
DOCKER_CONTAINER_HOSTNAME = "container"
GITHUB_ACTIONS_HOSTNAME = "all_github_actions"
ATLAS_ACTION_HOSTNAME = "atlascli_github_action"

_PLACEHOLDER = "-"
_SEPARATOR = "|"

# Order matters: it defines the slot layout of the hostname string
_HOSTNAME_ENVS = (
    (ATLAS_ACTION_HOSTNAME_ENV, ATLAS_ACTION_HOSTNAME),
    (GITHUB_ACTIONS_HOSTNAME_ENV, GITHUB_ACTIONS_HOSTNAME),
    (CONTAINERIZED_HOSTNAME_ENV, DOCKER_CONTAINER_HOSTNAME),
)

_GOOS = {
    "linux": "linux",
    "darwin": "darwin",
    "win32": "windows",
    "cygwin": "windows",
}

_GOARCH = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv6l": "arm",
    "armv7l": "arm",
    "armv7": "arm",
    "arm": "arm",
}


def _env_is_true(name: str) -> bool:
    return is_true(os.getenv(name, ""))


def _is_default_hostname(hostname: str) -> bool:
    """Check if every slot of the hostname is still the placeholder"""
    return hostname.count(_PLACEHOLDER) == hostname.count(_SEPARATOR) + 1


def config_hostname_from_envs() -> str:
    """Build the agent hostname label from the CI and container environment flags"""
    slots = [
        label if _env_is_true(env_name) else _PLACEHOLDER
        for env_name, label in _HOSTNAME_ENVS
    ]
    hostname = _SEPARATOR.join(slots)

    if _is_default_hostname(hostname):
        return NATIVE_HOSTNAME
    return hostname


def cli_user_type_from_envs() -> str:
    """Get the CLI user type, separating MongoDB University users from everyone else"""
    value = os.environ.get(CLI_USER_TYPE_ENV)
    if value is not None:
        return value
    return DEFAULT_USER


def is_telemetry_feature_allowed() -> bool:
    """Telemetry is off whenever DO_NOT_TRACK is set to a true-like value"""
    return not _env_is_true(DO_NOT_TRACK_ENV)


def has_legacy_env_vars() -> bool:
    """Check if any MongoCLI-prefixed environment variable is present"""
    prefix = f"{MONGO_CLI_ENV_PREFIX}_"
    return any(name.startswith(prefix) for name in os.environ)


def _goos() -> str:
    return _GOOS.get(sys.platform, sys.platform)


def _goarch() -> str:
    machine = platform.machine()
    return _GOARCH.get(machine.lower(), machine.lower())


HOSTNAME = config_hostname_from_envs()
CLI_USER_TYPE = cli_user_type_from_envs()


def user_agent(version: str) -> str:
    """
    Build the user agent sent with every API request.

    Example:
        >>> user_agent("1.30.0")
        'atlascli/1.30.0 (linux;amd64;native)'
    """
    return f"{ATLAS_CLI}/{version} ({_goos()};{_goarch()};{HOSTNAME})"
