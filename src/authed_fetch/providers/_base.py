from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from authed_fetch.credentials_parser import ANY_AUTH_TYPE, resolve_credentials
from authed_fetch.session import session_to_dict

log = logging.getLogger(__name__)


class OAuth2ProviderBase:
    """Session state shared by the OAuth2 session providers.

    The session is the OAuth2 token dict returned by the token endpoint.
    """

    def __init__(
        self,
        *,
        token_endpoint: str,
        auth: ANY_AUTH_TYPE = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        session: Any = None,
        revocation_endpoint: Optional[str] = None,
        on_session_updated: Optional[Callable[[dict], None]] = None,
        on_signed_out: Optional[Callable[[], None]] = None,
    ):
        """
        Args:
            token_endpoint: URL of the OAuth2 token endpoint used for the refresh-token grant.
            auth: Client credentials - path to credentials file, dict or (client_id, client_secret) tuple
            client_id: Client id, alternative to ``auth``
            client_secret: Client secret, alternative to ``auth``
            session: Initial session, an OAuth2 token dict or a ``Session``.
            revocation_endpoint: URL of the OAuth2 revocation endpoint called on sign-out.
            on_session_updated: Callback invoked with the new token dict whenever the session is refreshed.
            on_signed_out: Callback invoked when a session is signed out.
        """
        self.client_id, self.client_secret = resolve_credentials(auth, client_id, client_secret)
        self.token_endpoint = token_endpoint
        self.revocation_endpoint = revocation_endpoint
        self._on_session_updated = on_session_updated
        self._on_signed_out = on_signed_out
        self._session: Optional[Dict[str, Any]] = session_to_dict(session) if session is not None else None

    @property
    def session(self) -> Optional[Dict[str, Any]]:
        return self._session

    def _update_session(self, token: Dict[str, Any], previous_refresh_token: str) -> Dict[str, Any]:
        # Servers that do not rotate refresh tokens omit them from the refresh response
        token.setdefault("refresh_token", previous_refresh_token)
        self._session = token
        log.info(f"Got new session, with ttl={token.get('expires_in')}")
        if self._on_session_updated is not None:
            self._on_session_updated(token)
        return token

    def _forget_session(self) -> Optional[Dict[str, Any]]:
        session, self._session = self._session, None
        if session is not None and self._on_signed_out is not None:
            self._on_signed_out()
        return session
