import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

ANY_AUTH_TYPE = Union[str, os.PathLike, tuple, "ApiCredentials", dict, None]

REQUIRED_CREDENTIALS_FILE_KEYS = ["clientId"]


@dataclass
class ApiCredentials:
    client_id: str
    client_secret: Optional[str] = None


def parse_credentials(path: Union[str, os.PathLike, dict]) -> ApiCredentials:
    if isinstance(path, dict):
        credentials = path
    else:
        try:
            credentials = json.loads(Path(path).expanduser().read_text())
        except FileNotFoundError:
            raise FileNotFoundError(f"Could not find Api Credentials file at {path}") from None

    if not isinstance(credentials, dict):
        raise AttributeError(f"Could not json dict from {path}")

    for k in REQUIRED_CREDENTIALS_FILE_KEYS:
        if k not in credentials:
            raise KeyError(f"Missing key {k} in credentials file")

    return ApiCredentials(
        client_id=credentials.get("clientId"),
        client_secret=credentials.get("clientSecret"),
    )


def get_credentials_from_env() -> Tuple[Optional[str], Optional[str]]:
    creds = os.getenv("AUTHED_FETCH_CREDENTIALS")
    if creds:
        client_credentials = parse_credentials(creds)
        return client_credentials.client_id, client_credentials.client_secret

    return os.getenv("AUTHED_FETCH_CLIENT_ID"), os.getenv("AUTHED_FETCH_CLIENT_SECRET")


def resolve_credentials(
    auth: ANY_AUTH_TYPE = None, client_id: Optional[str] = None, client_secret: Optional[str] = None
) -> Tuple[Optional[str], Optional[str]]:
    """Resolve OAuth2 client credentials.

    ``auth`` may be a ``(client_id, client_secret)`` tuple, an ``ApiCredentials``, a credentials
    dict or the path of a JSON credentials file. Without any, the environment is consulted.
    A client secret is optional, public clients refresh with their client id only.
    """
    if client_id is not None:
        if auth is not None:
            raise ValueError("Choose either auth or client_id+client_secret")

    elif isinstance(auth, tuple):
        if len(auth) != 2:
            raise ValueError("Credentials tuple must be tuple of (client_id, client_secret)")
        client_id, client_secret = auth
    elif isinstance(auth, ApiCredentials):
        client_id = auth.client_id
        client_secret = auth.client_secret
    elif isinstance(auth, dict):
        creds = parse_credentials(auth)
        client_id = creds.client_id
        client_secret = creds.client_secret
    elif isinstance(auth, (str, os.PathLike)):
        path = str(auth)
        if not path.endswith(".json"):
            raise ValueError(f"Bad auth credentials file, must be json: {path}")
        creds = parse_credentials(auth)
        client_id = creds.client_id
        client_secret = creds.client_secret
    elif auth is not None:
        raise ValueError(f"Unsupported auth type: {type(auth)}")

    if not client_id and not client_secret:
        client_id, client_secret = get_credentials_from_env()

    return client_id, client_secret
