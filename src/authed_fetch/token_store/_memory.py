from __future__ import annotations

from typing import Optional

from authed_fetch.token_store._base import TokenStore


class MemoryTokenStore(TokenStore):
    """Token store living in process memory."""

    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def remove(self) -> None:
        self._token = None
