import logging
import os
from logging import NullHandler
from pathlib import Path

logging.getLogger(__name__).addHandler(NullHandler())

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0"

# Name the original browser client used for its access token cookie
ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"

AUTH_FAILURE_STATUSES = frozenset({401, 403})

DEFAULT_ENV_CONFIG_FILE_PATH = (
    Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "authed-fetch" / "environments.json"
)

DEFAULT_TOKEN_STORE_PATH = (
    Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache")) / "authed-fetch" / "tokens.json"
)

from authed_fetch.dispatcher import (  # noqa: E402
    AsyncAuthenticatedDispatcher,
    Attempt,
    AuthenticatedDispatcher,
    DispatchResult,
    TokenSource,
)
from authed_fetch.errors import AuthedFetchError, ConfigError, UnauthorizedError  # noqa: E402
from authed_fetch.options import RequestOptions  # noqa: E402
from authed_fetch.session import Session  # noqa: E402

__all__ = [
    "AsyncAuthenticatedDispatcher",
    "Attempt",
    "AuthenticatedDispatcher",
    "AuthedFetchError",
    "ConfigError",
    "DispatchResult",
    "RequestOptions",
    "Session",
    "TokenSource",
    "UnauthorizedError",
]
