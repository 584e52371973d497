"""Named configuration profiles for the Atlas CLI."""

import enum
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

import requests

from atlasconf.auth.token import Token, build_token, token_subject
from atlasconf.connection.transport import CredentialAuth, apply_transport, select_auth

from .environment import has_legacy_env_vars, is_telemetry_feature_allowed
from .paths import cli_config_home
from .properties import (
    ACCESS_TOKEN,
    ATLAS_CLI_ENV_PREFIX,
    BASE_URL,
    CLIENT_ID,
    CLOUD_GOV_SERVICE,
    CLOUD_SERVICE,
    CONFIG_FILENAME,
    CONFIG_PERMISSIONS,
    DEFAULT_PROFILE,
    DIRECTORY_PERMISSIONS,
    MONGO_CLI_ENV_PREFIX,
    MONGOSH_PATH,
    OPS_MANAGER_URL,
    ORG_ID,
    OUTPUT,
    PRIVATE_API_KEY,
    PROJECT_ID,
    PUBLIC_API_KEY,
    REDACTED,
    REFRESH_TOKEN,
    SERVICE,
    SKIP_UPDATE_CHECK,
    TELEMETRY_ENABLED,
    is_true,
    properties,
    secret_properties,
)
from .store import ConfigFileNotFoundError, SettingsStore

logger = logging.getLogger(__name__)


class ProfileNameHasDotsError(ValueError):
    """Raised for profile names containing '.', the TOML table path separator"""


class AuthMechanism(enum.Enum):
    """How a profile authenticates against the API"""

    API_KEYS = "api_keys"
    OAUTH = "oauth"
    NOT_LOGGED_IN = "not_logged_in"


class Setter(Protocol):
    def set(self, key: str, value: Any) -> None: ...


class GlobalSetter(Protocol):
    def set_global(self, key: str, value: Any) -> None: ...


class Saver(Protocol):
    def save(self) -> None: ...


class SetSaver(Setter, GlobalSetter, Saver, Protocol):
    """Anything that can stage settings and persist them"""


def validate_name(name: str) -> None:
    """Reject profile names that would be read back as nested TOML tables"""
    if "." in name:
        raise ProfileNameHasDotsError(f"profile should not contain '.': {name!r}")


def list_profiles(store: SettingsStore) -> list[str]:
    """List the names of the profiles held in a store, sorted"""
    known = properties()
    return sorted(
        key
        for key, value in store.all_settings().items()
        if key not in known and isinstance(value, dict)
    )


def profile_exists(name: str, store: SettingsStore) -> bool:
    """Check if a store has any settings for a profile name"""
    return name in list_profiles(store)


class Profile:
    """A named view over a settings store

    Reads prefer the top-level (global) value of a key and fall back to the
    profile's own table. Writes go to the profile's table unless made with
    ``set_global``.

    Args:
        name: Profile name, defaults to "default"
        store: Settings store shared by every profile of the process
        config_dir: Directory holding config.toml. If None, the Atlas CLI
            config home is used. A failure to resolve it is kept and raised
            by ``load_config``.

    Example:
        >>> store = SettingsStore()
        >>> profile = Profile("dev", store=store)
        >>> profile.load_config()
        >>> profile.set_project_id("5e2211c17a3e5a48f5497de3")
        >>> profile.save()
    """

    def __init__(
        self,
        name: str = DEFAULT_PROFILE,
        store: Optional[SettingsStore] = None,
        config_dir: Optional[Union[str, Path]] = None,
    ) -> None:
        self._name = name
        self._store = store if store is not None else SettingsStore()
        self._err: Optional[OSError] = None

        if config_dir is not None:
            self._config_dir = Path(config_dir)
        else:
            try:
                self._config_dir = cli_config_home()
            except OSError as e:
                self._config_dir = Path()
                self._err = e

    @property
    def name(self) -> str:
        return self._name

    @property
    def store(self) -> SettingsStore:
        return self._store

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    def set_name(self, name: str) -> None:
        """Switch to another profile name, lowercased"""
        validate_name(name)
        self._name = name.lower()

    def set(self, key: str, value: Any) -> None:
        """Set a value in this profile's table"""
        settings = self._store.get_string_map(self._name)
        settings[key.lower()] = value
        self._store.set(self._name, settings)

    def set_global(self, key: str, value: Any) -> None:
        """Set a value at the top level, shared by every profile"""
        self._store.set(key, value)

    def get(self, key: str) -> Any:
        """Get a value, preferring a non-empty global value over the profile's own"""
        if self._store.is_set(key):
            value = self._store.get(key)
            if value != "":
                return value
        return self._store.get_string_map(self._name).get(key.lower())

    def get_string(self, key: str) -> str:
        value = self.get(key)
        if value is None:
            return ""
        return str(value)

    def get_bool(self, key: str) -> bool:
        return self.get_bool_with_default(key, False)

    def get_bool_with_default(self, key: str, default: bool) -> bool:
        """Get a boolean, accepting true-like strings, or default for anything else"""
        value = self.get(key)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return is_true(value)
        return default

    # Service

    def service(self) -> str:
        if self._store.is_set(SERVICE):
            return str(self._store.get(SERVICE))
        return str(self._store.get_string_map(self._name).get(SERVICE, ""))

    def set_service(self, value: str) -> None:
        self.set(SERVICE, value)

    def is_cloud(self) -> bool:
        """Check if the profile targets Atlas (commercial or government) rather than Ops Manager"""
        return self.service() in ("", CLOUD_SERVICE, CLOUD_GOV_SERVICE)

    # Credentials

    def public_api_key(self) -> str:
        return self.get_string(PUBLIC_API_KEY)

    def set_public_api_key(self, value: str) -> None:
        self.set(PUBLIC_API_KEY, value)

    def private_api_key(self) -> str:
        return self.get_string(PRIVATE_API_KEY)

    def set_private_api_key(self, value: str) -> None:
        self.set(PRIVATE_API_KEY, value)

    def access_token(self) -> str:
        return self.get_string(ACCESS_TOKEN)

    def set_access_token(self, value: str) -> None:
        self.set(ACCESS_TOKEN, value)

    def refresh_token(self) -> str:
        return self.get_string(REFRESH_TOKEN)

    def set_refresh_token(self, value: str) -> None:
        self.set(REFRESH_TOKEN, value)

    def client_id(self) -> str:
        return self.get_string(CLIENT_ID)

    def auth_type(self) -> AuthMechanism:
        """Get how this profile authenticates, API keys winning over OAuth"""
        if self.public_api_key() and self.private_api_key():
            return AuthMechanism.API_KEYS
        if self.access_token():
            return AuthMechanism.OAUTH
        return AuthMechanism.NOT_LOGGED_IN

    def is_access_set(self) -> bool:
        """Check if an API key pair is configured"""
        return bool(self.public_api_key() and self.private_api_key())

    def token(self) -> Optional[Token]:
        """
        Get the configured OAuth token pair.

        Returns:
            None when either token is missing, since not being logged in
            is not an error

        Raises:
            jwt.DecodeError: If the access token is not a well-formed JWT
        """
        access_token = self.access_token()
        refresh_token = self.refresh_token()
        if not access_token or not refresh_token:
            return None
        return build_token(access_token, refresh_token)

    def access_token_subject(self) -> str:
        """
        Get the subject encoded in the access token.

        The token signature is not verified, so the result is only fit for
        display.
        """
        return token_subject(self.access_token())

    # Identifiers and preferences

    def ops_manager_url(self) -> str:
        return self.get_string(OPS_MANAGER_URL)

    def set_ops_manager_url(self, value: str) -> None:
        self.set(OPS_MANAGER_URL, value)

    def project_id(self) -> str:
        return self.get_string(PROJECT_ID)

    def set_project_id(self, value: str) -> None:
        self.set(PROJECT_ID, value)

    def org_id(self) -> str:
        return self.get_string(ORG_ID)

    def set_org_id(self, value: str) -> None:
        self.set(ORG_ID, value)

    def output(self) -> str:
        return self.get_string(OUTPUT)

    def set_output(self, value: str) -> None:
        self.set(OUTPUT, value)

    def mongosh_path(self) -> str:
        return self.get_string(MONGOSH_PATH)

    def set_mongosh_path(self, value: str) -> None:
        self.set_global(MONGOSH_PATH, value)

    def skip_update_check(self) -> bool:
        return self.get_bool(SKIP_UPDATE_CHECK)

    def set_skip_update_check(self, value: bool) -> None:
        self.set_global(SKIP_UPDATE_CHECK, value)

    def is_telemetry_enabled_set(self) -> bool:
        return self._store.is_set(TELEMETRY_ENABLED)

    def telemetry_enabled(self) -> bool:
        """Telemetry is on unless opted out in config or through DO_NOT_TRACK"""
        return is_telemetry_feature_allowed() and self.get_bool_with_default(
            TELEMETRY_ENABLED, True
        )

    def set_telemetry_enabled(self, value: bool) -> None:
        if not is_telemetry_feature_allowed():
            logger.debug("DO_NOT_TRACK is set, not changing %s", TELEMETRY_ENABLED)
            return
        self.set_global(TELEMETRY_ENABLED, value)

    # Description

    def map(self) -> Dict[str, str]:
        """Describe the profile's own settings with secrets redacted"""
        secrets = secret_properties()
        return {
            k: REDACTED if k in secrets else str(v)
            for k, v in self._store.get_string_map(self._name).items()
        }

    def sorted_keys(self) -> list[str]:
        return sorted(self.map())

    # Persistence

    def filename(self) -> Path:
        return self._config_dir / CONFIG_FILENAME

    def load_config(self, read_environment_vars: bool = True) -> None:
        """
        Read the configuration file into the store.

        Args:
            read_environment_vars: Bind MONGODB_ATLAS_* (or legacy MCLI_*)
                environment variables as overrides

        Raises:
            OSError: If the config home could not be resolved when the
                profile was created, or the file cannot be read
            tomllib.TOMLDecodeError: If the file is not valid TOML
        """
        if self._err is not None:
            raise self._err

        if read_environment_vars:
            prefix = ATLAS_CLI_ENV_PREFIX
            if has_legacy_env_vars():
                logger.debug("Found %s_* variables, using legacy prefix", MONGO_CLI_ENV_PREFIX)
                prefix = MONGO_CLI_ENV_PREFIX
            self._store.automatic_env(prefix)

        # aliases only apply to keys read from the file, not to env variables
        self._store.register_alias(BASE_URL, OPS_MANAGER_URL)

        try:
            self._store.read_in_config(self.filename())
        except ConfigFileNotFoundError:
            logger.debug("No configuration at %s yet", self.filename())

    def _ensure_config_dir(self) -> None:
        if self._err is not None:
            raise self._err
        # every directory created, parents included, is owner-only
        missing = [
            d for d in (self._config_dir, *self._config_dir.parents) if not d.exists()
        ]
        for directory in reversed(missing):
            directory.mkdir(mode=DIRECTORY_PERMISSIONS, exist_ok=True)

    def save(self) -> None:
        """Write every profile and global setting to the config file"""
        self._ensure_config_dir()
        self._store.write_config_as(self.filename(), CONFIG_PERMISSIONS)

    def delete(self) -> None:
        """
        Remove this profile's table, keeping global settings and other profiles.

        The store is only changed once the file has been written, so a failed
        write leaves both untouched.
        """
        self._ensure_config_dir()
        settings = self._store.all_settings()
        settings.pop(self._name, None)
        self._store.write_settings_as(self.filename(), settings, CONFIG_PERMISSIONS)

        self._store.delete(self._name)
        logger.debug("Deleted profile %s", self._name)

    def rename(self, new_name: str) -> None:
        """
        Move this profile's settings under a new name.

        A profile already using the new name is overwritten. The profile
        object follows the rename and carries the new, lowercased name.
        Nothing changes in memory if the file cannot be written.

        Raises:
            ProfileNameHasDotsError: If the new name contains '.'
        """
        validate_name(new_name)
        new_name = new_name.lower()

        self._ensure_config_dir()
        settings = self._store.all_settings()
        table = self._store.get_string_map(self._name)
        if new_name != self._name:
            settings.pop(self._name, None)
            if table:
                settings[new_name] = table
        self._store.write_settings_as(self.filename(), settings, CONFIG_PERMISSIONS)

        if new_name != self._name:
            self._store.delete(self._name)
            if table:
                self._store.set(new_name, table)
        logger.debug("Renamed profile %s to %s", self._name, new_name)
        self._name = new_name

    # HTTP

    def http_auth(self) -> Optional[CredentialAuth]:
        return select_auth(
            self.public_api_key(), self.private_api_key(), self.access_token()
        )

    def http_transport(self, base: Optional[requests.Session] = None) -> requests.Session:
        """Get a session carrying this profile's credentials, leaving ``base`` untouched"""
        return apply_transport(base, self.http_auth())

    def http_client(self) -> requests.Session:
        """Create a new session authenticated with this profile's credentials"""
        return self.http_transport(None)

    def http_base_url(self) -> str:
        return self.ops_manager_url()

    def __repr__(self) -> str:
        return f"Profile(name='{self._name}', config_dir='{self._config_dir}')"
