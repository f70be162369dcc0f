from __future__ import annotations

import logging
from typing import Optional

from authed_fetch import ACCESS_TOKEN_KEY
from authed_fetch.token_store._base import SERVICE_NAME, TokenStore

log = logging.getLogger(__name__)

_KEYRING_MISSING = object()  # sentinel: import attempted but unavailable


class KeyringTokenStore(TokenStore):
    """Token store backed by the system keyring."""

    def __init__(self, key: str = ACCESS_TOKEN_KEY) -> None:
        self.key = key
        self._keyring_module = None  # not yet resolved

    def _keyring(self):
        """Return the keyring module if usable, else None. Result is cached."""
        if self._keyring_module is _KEYRING_MISSING:
            return None
        if self._keyring_module is not None:
            return self._keyring_module
        try:
            import keyring

            backend = keyring.get_keyring()
            if "fail" in type(backend).__name__.lower():
                raise RuntimeError("unusable keyring backend")
            self._keyring_module = keyring
        except Exception:
            self._keyring_module = _KEYRING_MISSING
            return None
        return self._keyring_module

    def get(self) -> Optional[str]:
        kr = self._keyring()
        if kr is None:
            return None
        try:
            token = kr.get_password(SERVICE_NAME, self.key)
        except Exception:
            log.debug("Failed to load token from keyring", exc_info=True)
            return None
        if not token:
            return None
        log.debug("Using stored token from keyring (key=%s)", self.key)
        return token

    def set(self, token: str) -> None:
        kr = self._keyring()
        if kr is None:
            return
        try:
            kr.set_password(SERVICE_NAME, self.key, token)
            log.debug("Saved token to keyring for key=%s", self.key)
        except Exception:
            log.debug("Failed to save token to keyring", exc_info=True)

    def remove(self) -> None:
        kr = self._keyring()
        if kr is None:
            return
        try:
            kr.delete_password(SERVICE_NAME, self.key)
            log.debug("Removed token from keyring for key=%s", self.key)
        except Exception:
            log.debug("Failed to remove token from keyring", exc_info=True)
