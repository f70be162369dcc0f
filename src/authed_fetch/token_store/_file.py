from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from authed_fetch import ACCESS_TOKEN_KEY, DEFAULT_TOKEN_STORE_PATH
from authed_fetch.token_store._base import TokenStore

log = logging.getLogger(__name__)


class FileTokenStore(TokenStore):
    """Token store backed by a JSON file on disk.

    Several stores may share one file under different keys.
    """

    def __init__(self, path: Path = DEFAULT_TOKEN_STORE_PATH, key: str = ACCESS_TOKEN_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _load_all(self) -> dict:
        try:
            data = json.loads(self.path.read_text())
        except FileNotFoundError:
            return {}
        except Exception:
            log.debug("Failed to read token store file", exc_info=True)
            return {}
        return data if isinstance(data, dict) else {}

    def _save_all(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))

    def get(self) -> Optional[str]:
        token = self._load_all().get(self.key)
        if not isinstance(token, str) or not token:
            return None
        log.debug("Using stored token from file (key=%s)", self.key)
        return token

    def set(self, token: str) -> None:
        try:
            data = self._load_all()
            data[self.key] = token
            self._save_all(data)
            log.debug("Saved token to file store for key=%s", self.key)
        except Exception:
            log.debug("Failed to save token to file store", exc_info=True)

    def remove(self) -> None:
        try:
            data = self._load_all()
            if self.key in data:
                del data[self.key]
                self._save_all(data)
            log.debug("Removed token from file store for key=%s", self.key)
        except Exception:
            log.debug("Failed to remove token from file store", exc_info=True)
