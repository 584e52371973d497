"""In-memory settings store backed by a TOML document and environment variables.

Lookups consult three layers, highest precedence first:

1. explicit overrides written with ``set``
2. environment variables, once ``automatic_env`` has bound a prefix
3. values read from the TOML file with ``read_in_config``

Keys are case-insensitive and stored lowercased. Nested tables (one per
profile) are only ever replaced wholesale.
"""

import copy
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Use tomllib for Python 3.11+, fallback to tomli for older versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        raise ImportError(
            "Python < 3.11 requires 'tomli' package. " +
            "Install it with: pip install tomli"
        )

import tomli_w

from .properties import CONFIG_PERMISSIONS

logger = logging.getLogger(__name__)


class ConfigFileNotFoundError(FileNotFoundError):
    """Raised when the configuration file does not exist yet"""


def _lower_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        str(k).lower(): _lower_keys(v) if isinstance(v, dict) else v
        for k, v in data.items()
    }


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    """TOML has no null, so unset values are left out of the document"""
    cleaned: Dict[str, Any] = {}
    for k, v in data.items():
        if v is None:
            continue
        cleaned[k] = _drop_none(v) if isinstance(v, dict) else v
    return cleaned


def atomic_write(path: Path, content: str, mode: int = CONFIG_PERMISSIONS) -> None:
    """
    Replace a file's content without ever exposing a partially written file.

    The content goes to a temporary file in the same directory, which is
    flushed to disk and then moved over the target.

    Raises:
        OSError: If the temporary file cannot be written or moved into place.
            The temporary file is removed before the error propagates.
    """
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


class SettingsStore:
    """Layered key/value settings with TOML persistence and env binding"""

    def __init__(self) -> None:
        self._override: Dict[str, Any] = {}
        self._config: Dict[str, Any] = {}
        self._aliases: Dict[str, str] = {}
        self._env_prefix: Optional[str] = None
        self.config_file: Optional[Path] = None

    def _key(self, key: str) -> str:
        key = key.lower()
        return self._aliases.get(key, key)

    def automatic_env(self, prefix: str) -> None:
        """Make every top-level lookup also consult PREFIX_KEY environment variables"""
        self._env_prefix = prefix.upper()

    def env_name(self, key: str) -> Optional[str]:
        """Name of the environment variable bound to a key, if binding is enabled"""
        if self._env_prefix is None:
            return None
        return f"{self._env_prefix}_{self._key(key).upper()}"

    def _from_env(self, key: str) -> Optional[str]:
        name = self.env_name(key)
        if name is None:
            return None
        # empty variables count as unset
        value = os.environ.get(name)
        return value or None

    def register_alias(self, alias: str, key: str) -> None:
        """Read and write ``alias`` as if it were ``key``"""
        self._aliases[alias.lower()] = key.lower()

    def set(self, key: str, value: Any) -> None:
        self._override[self._key(key)] = value

    def get(self, key: str) -> Any:
        key = self._key(key)
        if key in self._override:
            return self._override[key]
        env_value = self._from_env(key)
        if env_value is not None:
            return env_value
        return self._config.get(key)

    def is_set(self, key: str) -> bool:
        key = self._key(key)
        return (
            key in self._override
            or self._from_env(key) is not None
            or key in self._config
        )

    def get_string_map(self, name: str) -> Dict[str, Any]:
        """Get a copy of a nested table, or an empty dict if there is none"""
        key = self._key(name)
        if key in self._override:
            value = self._override[key]
        else:
            value = self._config.get(key)
        if not isinstance(value, dict):
            return {}
        return dict(value)

    def delete(self, key: str) -> None:
        """Remove a top-level key from every in-memory layer"""
        key = self._key(key)
        self._override.pop(key, None)
        self._config.pop(key, None)

    def all_settings(self) -> Dict[str, Any]:
        """
        Merge file contents and overrides into one document.

        Environment values are not included so they are never persisted.
        """
        merged = copy.deepcopy(self._config)
        merged.update(copy.deepcopy(self._override))
        return merged

    def _apply_aliases(self, data: Dict[str, Any]) -> Dict[str, Any]:
        resolved: Dict[str, Any] = {}
        for k, v in data.items():
            if isinstance(v, dict):
                v = self._apply_aliases(v)
            resolved[self._aliases.get(k, k)] = v
        return resolved

    def read_in_config(self, path: Union[str, Path]) -> None:
        """
        Load a TOML document as the file layer.

        Raises:
            ConfigFileNotFoundError: If the file does not exist
            tomllib.TOMLDecodeError: If the file is not valid TOML
        """
        config_file = Path(path)
        if not config_file.is_file():
            raise ConfigFileNotFoundError(
                f"Config file not found at {config_file}"
            )

        with open(config_file, "rb") as f:
            data = tomllib.load(f)

        self._config = self._apply_aliases(_lower_keys(data))
        self.config_file = config_file
        logger.debug("Read configuration from %s", config_file)

    def write_config_as(self, path: Union[str, Path], mode: int = CONFIG_PERMISSIONS) -> None:
        """Write the merged document to a file, replacing it atomically"""
        self.write_settings_as(path, self.all_settings(), mode)

    def write_settings_as(
        self,
        path: Union[str, Path],
        settings: Dict[str, Any],
        mode: int = CONFIG_PERMISSIONS,
    ) -> None:
        """Write a given document to a file, replacing it atomically.

        The store itself is not changed, so callers can write an edited copy
        of ``all_settings()`` and only apply the edit once it is on disk.
        """
        content = tomli_w.dumps(_drop_none(settings))
        atomic_write(Path(path), content, mode)
        logger.debug("Wrote configuration to %s", path)
