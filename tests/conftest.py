"""Pytest configuration and shared fixtures."""

import os
from pathlib import Path

import pytest

from atlasconf.config import Profile, SettingsStore
from atlasconf.config.defaults import default, set_default


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every environment variable that changes how settings resolve."""
    for name in list(os.environ):
        if name.startswith(("MONGODB_ATLAS_", "MCLI_")):
            monkeypatch.delenv(name, raising=False)
    for name in ("GITHUB_ACTIONS", "ATLAS_GITHUB_ACTION", "CLI_USER_TYPE", "DO_NOT_TRACK"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def store() -> SettingsStore:
    """A fresh settings store, isolated from the process default."""
    return SettingsStore()


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Directory that holds config.toml for a test."""
    return tmp_path / "atlascli"


@pytest.fixture
def profile(store: SettingsStore, config_dir: Path) -> Profile:
    """The default profile over an isolated store and config directory."""
    return Profile(store=store, config_dir=config_dir)


@pytest.fixture
def config_file(config_dir: Path) -> Path:
    """Write a config.toml with two profiles and global settings."""
    config_content = """
skip_update_check = true
mongosh_path = "/usr/local/bin/mongosh"

[default]
org_id = "5e2211c17a3e5a48f5497de3"
project_id = "5e2211c17a3e5a48f5497de4"
public_api_key = "abcdefgh"
private_api_key = "e6f0e0c6-0000-0000-0000-000000000000"
output = "json"
service = "cloud"

[p1]
org_id = "p1-org"
base_url = "https://opsmanager.example.com:8080/"
service = "ops-manager"
"""
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.toml"
    config_path.write_text(config_content)
    return config_path


@pytest.fixture
def default_profile(profile: Profile):
    """Install an isolated profile as the process default for one test."""
    previous = set_default(profile)
    yield default()
    set_default(previous)
