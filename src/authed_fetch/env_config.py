import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from authed_fetch import DEFAULT_ENV_CONFIG_FILE_PATH
from authed_fetch.errors import ConfigError
from authed_fetch.token_store import STORE_MODES


@dataclass
class Environment:
    name: str
    host: str
    token_endpoint: str
    revocation_endpoint: Optional[str] = None
    credentials: Optional[str] = None
    token_store: str = "auto"


@dataclass
class EnvConfig:
    environments: dict = field(default_factory=dict)
    default_environment: Optional[str] = None


def _parse_environment(name: str, env_data: dict) -> Environment:
    for key in ("host", "token_endpoint"):
        if key not in env_data:
            raise ConfigError(f"Missing key {key} in environment {name}")
    token_store = env_data.get("token_store", "auto")
    if token_store not in STORE_MODES:
        raise ConfigError(f"Unknown token_store {token_store} in environment {name}")
    credentials = env_data.get("credentials")
    if credentials:
        credentials = str(Path(credentials).expanduser())
    return Environment(
        name=name,
        host=env_data["host"],
        token_endpoint=env_data["token_endpoint"],
        revocation_endpoint=env_data.get("revocation_endpoint"),
        credentials=credentials,
        token_store=token_store,
    )


def load_env_config(path=DEFAULT_ENV_CONFIG_FILE_PATH) -> EnvConfig:
    """Load config from JSON file. Returns empty config if file doesn't exist."""
    expanded = Path(path).expanduser()
    if not expanded.exists():
        return EnvConfig()

    try:
        data = json.loads(expanded.read_text())
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {expanded}: {e}") from e

    environments = {name: _parse_environment(name, env_data) for name, env_data in data.get("environments", {}).items()}

    return EnvConfig(
        environments=environments,
        default_environment=data.get("default_environment"),
    )


def resolve_environment(config: EnvConfig, url: str, env_name: Optional[str] = None) -> Environment:
    """Resolve which environment to use for a given URL.

    Resolution order:
    1. Explicit env_name (--env flag)
    2. Exact host match from URL
    3. Subdomain suffix match from URL
    4. default_environment from config
    """
    # Explicit env name
    if env_name:
        if env_name not in config.environments:
            raise ConfigError(f"Unknown environment: {env_name}")
        return config.environments[env_name]

    # Domain matching
    parsed = urlparse(url)
    hostname = parsed.hostname or ""

    # Exact match
    for env in config.environments.values():
        if hostname == env.host:
            return env

    # Subdomain suffix match
    for env in config.environments.values():
        if hostname.endswith("." + env.host):
            return env

    # Default environment fallback
    if config.default_environment and config.default_environment in config.environments:
        return config.environments[config.default_environment]

    raise ConfigError(f"No environment configured for {hostname or url}")
