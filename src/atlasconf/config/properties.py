"""Known setting names and shared constants for Atlas CLI profiles"""

MONGO_CLI_ENV_PREFIX = "MCLI"  # legacy MongoCLI prefix
ATLAS_CLI_ENV_PREFIX = "MONGODB_ATLAS"

DEFAULT_PROFILE = "default"
CLOUD_SERVICE = "cloud"
CLOUD_GOV_SERVICE = "cloudgov"

PROJECT_ID = "project_id"
ORG_ID = "org_id"
MONGOSH_PATH = "mongosh_path"
SERVICE = "service"
PUBLIC_API_KEY = "public_api_key"
PRIVATE_API_KEY = "private_api_key"
ACCESS_TOKEN = "access_token"
REFRESH_TOKEN = "refresh_token"
CLIENT_ID = "client_id"
OPS_MANAGER_URL = "ops_manager_url"
BASE_URL = "base_url"
OUTPUT = "output"
SKIP_UPDATE_CHECK = "skip_update_check"
TELEMETRY_ENABLED = "telemetry_enabled"

CONFIG_NAME = "config"
CONFIG_TYPE = "toml"
CONFIG_FILENAME = f"{CONFIG_NAME}.{CONFIG_TYPE}"
CONFIG_PERMISSIONS = 0o600
DIRECTORY_PERMISSIONS = 0o700

REDACTED = "redacted"


def properties() -> list[str]:
    """Every setting name the CLI recognises"""
    return [
        PROJECT_ID,
        ORG_ID,
        SERVICE,
        PUBLIC_API_KEY,
        PRIVATE_API_KEY,
        OUTPUT,
        OPS_MANAGER_URL,
        BASE_URL,
        MONGOSH_PATH,
        SKIP_UPDATE_CHECK,
        TELEMETRY_ENABLED,
        ACCESS_TOKEN,
        REFRESH_TOKEN,
    ]


def boolean_properties() -> list[str]:
    """Settings whose values are booleans"""
    return [
        SKIP_UPDATE_CHECK,
        TELEMETRY_ENABLED,
    ]


def global_properties() -> list[str]:
    """Settings stored at the top level of the document rather than per profile"""
    return [
        SKIP_UPDATE_CHECK,
        TELEMETRY_ENABLED,
        MONGOSH_PATH,
    ]


def secret_properties() -> list[str]:
    """Settings that must never be displayed in clear text"""
    return [
        PRIVATE_API_KEY,
        ACCESS_TOKEN,
        REFRESH_TOKEN,
    ]


def is_true(value: str) -> bool:
    """Check if a string is one of the accepted spellings of true"""
    return value.lower() in ("t", "true", "y", "yes", "1")
