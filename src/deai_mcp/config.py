"""Configuration management for deai-mcp.

Constants for the DeAI analytics API, the API key lookup, and optional
overrides from deai.toml in the project root.
"""

import os
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

import tomllib

from deai_mcp import __version__


# ---------------------------------------------------------------------------
# API constants
# ---------------------------------------------------------------------------

API_BASE_URL = "https://api.decenterai.dev"

API_KEY_ENV = "API_KEY"
API_KEY_HEADER = "X-API-Key"

USER_AGENT = f"DeAI-MCP-Server/{__version__}"

REQUEST_TIMEOUT_DEFAULT = 30  # seconds

# Lists in tool output are cut to this many entries
MAX_LIST_ITEMS = 10

CONFIG_FILENAME = "deai.toml"


# EVM addresses: 0x followed by exactly 40 hex characters. Checksum casing
# is accepted but not verified.
_EVM_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
EVM_ADDRESS_PATTERN = _EVM_ADDRESS_RE.pattern


def is_evm_address(address) -> bool:
    """Check if a value is a 0x-prefixed 40-hex-character address."""
    return isinstance(address, str) and _EVM_ADDRESS_RE.fullmatch(address) is not None


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Settings:
    """Immutable settings shared by the router and the API client."""

    base_url: str = API_BASE_URL
    timeout: float = REQUEST_TIMEOUT_DEFAULT
    user_agent: str = USER_AGENT
    api_key_env: str = API_KEY_ENV


def _project_root() -> str:
    """Return the deai-mcp project root directory.

    Resolution order:
    1. DEAI_ROOT environment variable (if set)
    2. Current working directory
    """
    return os.environ.get("DEAI_ROOT", os.environ.get("PWD", os.getcwd()))


def find_config() -> Optional[Path]:
    """Find deai.toml in cwd or DEAI_ROOT.

    Returns:
        Path to config file if found, None otherwise.
    """
    config_path = Path(_project_root()) / CONFIG_FILENAME
    if config_path.exists():
        return config_path
    return None


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Build Settings from defaults and the optional [api] table of deai.toml.

    Raises:
        ValueError: if the file sets a non-positive timeout or an empty URL.
    """
    settings = Settings()
    path = config_path or find_config()
    if path is None:
        return settings

    with open(path, "rb") as f:
        config = tomllib.load(f)

    api = config.get("api", {})
    overrides = {}
    if "base_url" in api:
        base_url = str(api["base_url"]).strip().rstrip("/")
        if not base_url:
            raise ValueError(f"{CONFIG_FILENAME}: [api] base_url must not be empty")
        overrides["base_url"] = base_url
    if "timeout" in api:
        timeout = float(api["timeout"])
        if timeout <= 0:
            raise ValueError(f"{CONFIG_FILENAME}: [api] timeout must be > 0")
        overrides["timeout"] = timeout

    log(f"Loaded settings from {path}: {sorted(overrides)}")
    return replace(settings, **overrides)


def get_api_key(settings: Optional[Settings] = None) -> str:
    """Return the API key from the environment, or "" when unset."""
    env_name = (settings or Settings()).api_key_env
    return os.environ.get(env_name, "").strip()


# ---------------------------------------------------------------------------
# Logging shortcut
# ---------------------------------------------------------------------------

def set_verbose(enabled: bool) -> None:
    """Switch the session log between DEBUG and INFO."""
    from deai_mcp.logging_config import set_debug
    set_debug(enabled)


def log(msg: str) -> None:
    """Log a debug message to the session log (file only)."""
    from deai_mcp.logging_config import get_logger
    get_logger().debug(msg)
