"""Async OAuth2 session provider using authlib's httpx integration."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.httpx_client import AsyncOAuth2Client

from authed_fetch.providers._base import OAuth2ProviderBase
from authed_fetch.session import refresh_token_of

log = logging.getLogger(__name__)


class AsyncOAuth2SessionProvider(OAuth2ProviderBase):
    """Async counterpart of ``OAuth2SessionProvider``."""

    def __init__(self, *, oauth_client: Optional[AsyncOAuth2Client] = None, **kwargs):
        super().__init__(**kwargs)
        self.oauth_client = oauth_client or AsyncOAuth2Client(
            client_id=self.client_id,
            client_secret=self.client_secret,
            token_endpoint=self.token_endpoint,
            token_endpoint_auth_method="client_secret_post" if self.client_secret else "none",
        )

    async def get_session(self) -> Optional[Dict[str, Any]]:
        return self._session

    async def set_session(self, session: Any) -> Optional[Dict[str, Any]]:
        refresh_token = refresh_token_of(session)
        if not refresh_token:
            log.warning("Session has no refresh token, cannot refresh")
            return None
        try:
            token = await self.oauth_client.refresh_token(self.token_endpoint, refresh_token=refresh_token)
        except (AuthlibBaseError, httpx.HTTPStatusError):
            log.warning("Failed to refresh session", exc_info=True)
            return None
        return self._update_session(dict(token), refresh_token)

    async def sign_out(self) -> None:
        session = self._forget_session()
        if session is None or self.revocation_endpoint is None:
            return
        token = refresh_token_of(session)
        hint = "refresh_token" if token else "access_token"
        await self.oauth_client.revoke_token(
            self.revocation_endpoint, token=token or session.get("access_token"), token_type_hint=hint
        )
        log.debug("Revoked session")

    async def aclose(self) -> None:
        await self.oauth_client.aclose()
