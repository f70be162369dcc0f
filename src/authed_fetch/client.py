"""Build dispatchers for a configured environment."""

from __future__ import annotations

import os
from typing import Any, Dict, Optional, Union

from authed_fetch import DEFAULT_ENV_CONFIG_FILE_PATH, REFRESH_TOKEN_KEY
from authed_fetch.dispatcher import AuthenticatedDispatcher
from authed_fetch.env_config import Environment, load_env_config
from authed_fetch.errors import ConfigError
from authed_fetch.providers.oauth2 import OAuth2SessionProvider
from authed_fetch.token_store import TokenStore, make_store
from authed_fetch.transports.requests_transport import RequestsTransport

REFRESH_TOKEN_ENV_VAR = "AUTHED_FETCH_REFRESH_TOKEN"


def create_dispatcher(
    environment: Environment,
    *,
    refresh_token: Optional[str] = None,
    access_token: Optional[str] = None,
    token_store: Optional[TokenStore] = None,
    refresh_token_store: Optional[TokenStore] = None,
    client_name: Optional[str] = None,
) -> AuthenticatedDispatcher:
    """Create a blocking dispatcher for an environment.

    Refresh tokens rotated by the token endpoint are saved to the refresh token store, so the next
    dispatcher continues from the latest one. Both stored tokens are removed on sign-out.

    Args:
        environment: Environment providing the token endpoint, credentials and token store mode.
        refresh_token: Refresh token of the initial session. Defaults to the stored refresh token,
            then to $AUTHED_FETCH_REFRESH_TOKEN.
        access_token: Access token of the initial session. Defaults to the token in the store.
        token_store: Access token store to use instead of the one configured for the environment.
        refresh_token_store: Refresh token store to use instead of the one configured for the environment.
        client_name: Name added to User-Agent header.

    Returns:
        Dispatcher sending with requests and refreshing through the environment's token endpoint.
    """
    if token_store is None:
        token_store = make_store(environment.token_store)
    if refresh_token_store is None:
        refresh_token_store = make_store(environment.token_store, key=REFRESH_TOKEN_KEY)

    if not refresh_token and refresh_token_store is not None:
        refresh_token = refresh_token_store.get()
    refresh_token = refresh_token or os.getenv(REFRESH_TOKEN_ENV_VAR)
    if access_token is None and token_store is not None:
        access_token = token_store.get()

    session = None
    if refresh_token or access_token:
        session = {"access_token": access_token, "refresh_token": refresh_token}

    on_session_updated = on_signed_out = None
    if refresh_token_store is not None:

        def on_session_updated(token: Dict[str, Any]) -> None:
            if token.get("refresh_token"):
                refresh_token_store.set(token["refresh_token"])

        on_signed_out = refresh_token_store.remove

    provider = OAuth2SessionProvider(
        token_endpoint=environment.token_endpoint,
        revocation_endpoint=environment.revocation_endpoint,
        auth=environment.credentials,
        session=session,
        on_session_updated=on_session_updated,
        on_signed_out=on_signed_out,
    )
    return AuthenticatedDispatcher(RequestsTransport(client_name=client_name), provider, token_store=token_store)


def dispatcher_from_env(
    env: str,
    *,
    env_config_path: Union[str, os.PathLike] = "",
    **kwargs,
) -> AuthenticatedDispatcher:
    """Create a dispatcher from a named environment in the config file.

    Args:
        env: Environment name to look up in the config file.
        env_config_path: Path to config file. Defaults to ~/.config/authed-fetch/environments.json.
        **kwargs: Additional arguments passed to ``create_dispatcher``.
    """
    config_file_path = env_config_path or DEFAULT_ENV_CONFIG_FILE_PATH
    cfg = load_env_config(config_file_path)
    if env not in cfg.environments:
        raise ConfigError(f"Unknown environment: {env} not found in config at {config_file_path}")
    return create_dispatcher(cfg.environments[env], **kwargs)
