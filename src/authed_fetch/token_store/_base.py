from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

SERVICE_NAME = "authed-fetch"


class TokenStore(ABC):
    """Abstract base class for bearer token stores.

    A store holds at most one current token. Implementations backed by external storage
    treat unreadable storage as "no token".
    """

    @abstractmethod
    def get(self) -> Optional[str]:
        """Return the current token, or None."""

    @abstractmethod
    def set(self, token: str) -> None:
        """Replace the current token."""

    @abstractmethod
    def remove(self) -> None:
        """Forget the current token. Does nothing if there is none."""
