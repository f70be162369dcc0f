"""Blocking OAuth2 session provider using authlib's requests integration."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.requests_client import OAuth2Session

from authed_fetch.providers._base import OAuth2ProviderBase
from authed_fetch.session import refresh_token_of

log = logging.getLogger(__name__)


class OAuth2SessionProvider(OAuth2ProviderBase):
    """Session provider refreshing an OAuth2 session with the refresh-token grant.

    Example:
        provider = OAuth2SessionProvider(
            token_endpoint="https://auth.example.com/oauth/token",
            auth="~/creds.json",
            session={"access_token": "...", "refresh_token": "..."},
        )
    """

    def __init__(self, *, oauth_session: Optional[OAuth2Session] = None, **kwargs):
        super().__init__(**kwargs)
        self.oauth_session = oauth_session or OAuth2Session(
            client_id=self.client_id,
            client_secret=self.client_secret,
            token_endpoint=self.token_endpoint,
            token_endpoint_auth_method="client_secret_post" if self.client_secret else "none",
        )

    def get_session(self) -> Optional[Dict[str, Any]]:
        return self._session

    def set_session(self, session: Any) -> Optional[Dict[str, Any]]:
        """Refresh ``session`` and return the new session, or None if the grant fails."""
        refresh_token = refresh_token_of(session)
        if not refresh_token:
            log.warning("Session has no refresh token, cannot refresh")
            return None
        try:
            token = self.oauth_session.refresh_token(self.token_endpoint, refresh_token=refresh_token)
        except (AuthlibBaseError, requests.HTTPError):
            log.warning("Failed to refresh session", exc_info=True)
            return None
        return self._update_session(dict(token), refresh_token)

    def sign_out(self) -> None:
        session = self._forget_session()
        if session is None or self.revocation_endpoint is None:
            return
        token = refresh_token_of(session)
        hint = "refresh_token" if token else "access_token"
        self.oauth_session.revoke_token(
            self.revocation_endpoint, token=token or session.get("access_token"), token_type_hint=hint
        )
        log.debug("Revoked session")
