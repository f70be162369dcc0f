"""Bearer token stores shared between dispatcher calls.

All keyring imports are lazy so the module works when keyring is not installed.
"""

from __future__ import annotations

from authed_fetch import ACCESS_TOKEN_KEY
from authed_fetch.token_store._base import TokenStore
from authed_fetch.token_store._file import FileTokenStore
from authed_fetch.token_store._keyring import KeyringTokenStore
from authed_fetch.token_store._memory import MemoryTokenStore

STORE_MODES = ("auto", "keyring", "file", "memory", "none")


def make_store(mode: str, key: str = ACCESS_TOKEN_KEY) -> TokenStore | None:
    """Return a TokenStore for the given mode, or None for 'none'.

    Persistent stores keep the token under ``key``, so one mode can hold several tokens.

    Modes:
      auto    – keyring if available, file otherwise (default)
      keyring – system keyring only
      file    – file-based store only
      memory  – process memory only
      none    – no store, tokens are read from the session provider
    """
    if mode not in STORE_MODES:
        raise ValueError(f"Unknown token store mode: {mode}")
    if mode == "none":
        return None
    if mode == "memory":
        return MemoryTokenStore()
    if mode == "file":
        return FileTokenStore(key=key)
    if mode == "keyring":
        return KeyringTokenStore(key=key)
    # auto
    candidate = KeyringTokenStore(key=key)
    if candidate._keyring() is not None:
        return candidate
    return FileTokenStore(key=key)


__all__ = ["TokenStore", "KeyringTokenStore", "FileTokenStore", "MemoryTokenStore", "make_store", "STORE_MODES"]
