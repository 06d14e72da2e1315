"""Configuration for the Sunvoy user export."""

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://challenge.sunvoy.com"
DEFAULT_API_URL = "https://api.challenge.sunvoy.com"
DEFAULT_CONFIG_FILE = "~/.config/sunvoy-tools/config.toml"
SESSION_FILENAME = "session.json"
OUTPUT_FILENAME = "users.json"


@dataclass(frozen=True)
class Config:
    """Endpoints, file locations and demo account used by every component.

    Build one with ``Config.for_host`` and pass it down; nothing reads
    module-level settings.
    """

    base_url: str
    login_page_url: str
    login_url: str
    tokens_url: str
    users_url: str
    settings_url: str
    credentials_file: Path
    output_file: Path
    username: str = "demo@example.org"
    password: str = "test"
    signing_secret: str = "mys3cr3t"
    expected_user_count: int = 10

    @classmethod
    def for_host(
        cls,
        base_url: str = DEFAULT_BASE_URL,
        api_url: str = DEFAULT_API_URL,
        data_dir: Path | str = ".",
        **overrides,
    ) -> "Config":
        """Derive all endpoint URLs and file paths from two hosts and a directory."""
        base_url = base_url.rstrip("/")
        api_url = api_url.rstrip("/")
        data_dir = Path(data_dir).expanduser()
        return cls(
            base_url=base_url,
            login_page_url=f"{base_url}/login",
            login_url=f"{base_url}/login",
            tokens_url=f"{base_url}/settings/tokens",
            users_url=f"{base_url}/api/users",
            settings_url=f"{api_url}/api/settings",
            credentials_file=data_dir / SESSION_FILENAME,
            output_file=data_dir / OUTPUT_FILENAME,
            **overrides,
        )


def load_config_file(path: Path | str = DEFAULT_CONFIG_FILE) -> dict:
    """Read the TOML config file, returning an empty table if there is none."""
    config_path = Path(path).expanduser()
    if not config_path.exists():
        logger.debug(f"Config file {config_path} not found, using defaults")
        return {}
    with open(config_path, "rb") as f:
        table = tomllib.load(f)
    logger.debug(f"Loaded config from {config_path}")
    return table


def resolve_config(args, config_file: Path | str = DEFAULT_CONFIG_FILE) -> Config:
    """Resolve a Config from command-line arguments.

    Each setting is taken from, in order:
    1. command-line option
    2. environment variable ($SUNVOY_BASE_URL, $SUNVOY_API_URL, $SUNVOY_DATA_DIR)
    3. config file
    4. built-in default
    """
    table = load_config_file(config_file)

    def pick(option, env_var, key, default):
        value = getattr(args, option, None)
        if value:
            return value
        value = os.environ.get(env_var)
        if value:
            return value
        return table.get(key) or default

    config = Config.for_host(
        base_url=pick("base_url", "SUNVOY_BASE_URL", "base_url", DEFAULT_BASE_URL),
        api_url=pick("api_url", "SUNVOY_API_URL", "api_url", DEFAULT_API_URL),
        data_dir=pick("data_dir", "SUNVOY_DATA_DIR", "data_dir", os.getcwd()),
    )

    overrides = {
        key: table[key]
        for key in ("username", "password", "signing_secret", "expected_user_count")
        if key in table
    }
    expected = getattr(args, "expected_count", None)
    if expected is not None:
        overrides["expected_user_count"] = expected
    return replace(config, **overrides)
